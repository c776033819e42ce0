"""
Допоміжні функції для BeautifulSoup
"""

from typing import List

from bs4 import BeautifulSoup, Tag


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, 'html.parser')


def element_text(element: Tag) -> str:
    """Текст елемента з усіма пробілами, згорнутими до одного"""
    return " ".join(element.get_text(" ").split())


def child_elements(element: Tag) -> List[Tag]:
    """Дочірні теги елемента без текстових вузлів"""
    return [child for child in element.children if isinstance(child, Tag)]
