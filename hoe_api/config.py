"""
Конфігурація клієнта hoe.com.ua
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from hoe_api.scraper.temporal import TemporalFormats


class Settings(BaseSettings):
    """Налаштування клієнта"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, frozen=True)

    # Сайт
    HOE_HOST: str = "https://hoe.com.ua"
    EVENT_LIST_PATH: str = "/shutdown/eventlist"
    PEM_LIST_PATH: str = "/shutdown/all"
    OUTAGE_LOOKUP_PATH: str = "/shutdown-events"
    QUEUE_LOOKUP_PATH: str = "/shutdown-queues"
    SETTLEMENTS_PATH: str = "/settlements"
    STREETS_PATH: str = "/streets"
    HOUSES_PATH: str = "/houses"
    SCHEDULE_PAGE_PATH: str = "/page/pogodinni-vidkljuchennja"

    # HTTP
    SCRAPER_TIMEOUT: int = 30
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # Формати дат
    DATE_FORMAT: str = "%d.%m.%Y"
    DATETIME_FORMAT: str = "%d.%m.%Y %H:%M"

    # Структура сторінок
    EVENT_TABLE_SELECTOR: str = "table.table.shutdown-table"
    EVENT_HEADING_SELECTOR: str = "h2"
    SCHEDULE_IMAGE_SELECTOR: str = "div.post > p > img"
    NO_OUTAGE_MARKER: str = "За вказаною адресою відсутнє зареєстроване відключення"
    ERROR_MARKER: str = "Помилка"

    # Планові відключення: період від сьогодні на N днів вперед
    PLANNED_DAYS_AHEAD: int = 5

    LOG_LEVEL: str = "INFO"

    def temporal_formats(self) -> TemporalFormats:
        return TemporalFormats(date_format=self.DATE_FORMAT, datetime_format=self.DATETIME_FORMAT)

    def url(self, path: str) -> str:
        """Повний URL для шляху на сайті"""
        return f"{self.HOE_HOST}{path}"


settings = Settings()
