"""
Парсери сторінок hoe.com.ua

- outage_parser: списки аварійних і планових відключень РЕМу (HTML таблиці)
- lookup_parser: відключення та черги за конкретною адресою
- pem_parser: перелік РЕМів
- schedule_parser: зображення графіка погодинних відключень
- street_parser, temporal: розбір адрес і дат
"""
