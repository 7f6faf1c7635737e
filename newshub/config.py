# === FILE: newshub/config.py ===
"""
Модуль для загрузки и валидации конфигурации NewsHub.
Используется Pydantic для описания схемы и проверки данных.

Ключи API можно не хранить в файле: переменные окружения
``NEWSHUB_API_KEY`` и ``NEWSHUB_READER_API_KEY`` перекрывают значения из конфига.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

_ENV_OVERRIDES = {
    "NEWSHUB_API_KEY": "news_api_key",
    "NEWSHUB_READER_API_KEY": "reader_api_key",
}


class NewsHubConfig(BaseModel):
    """Настройки клиента: провайдер новостей, сервис извлечения текста, история."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    news_api_key: str = Field("", description="Ключ API провайдера заголовков.")
    news_api_base_url: HttpUrl = Field(
        "https://newsapi.org/v2", description="Базовый URL провайдера заголовков/поиска."
    )
    country: str = Field("us", min_length=2, max_length=2, description="Страна для top-headlines.")
    language: str = Field("en", min_length=2, description="Язык для поиска.")
    page_size: int = Field(30, ge=1, le=100, description="Размер страницы выдачи.")

    reader_base_url: HttpUrl = Field(
        "https://r.jina.ai", description="Endpoint сервиса извлечения читаемого текста."
    )
    reader_api_key: str = Field("", description="Bearer-ключ сервиса извлечения (необязателен).")

    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("NewsHub/0.1", min_length=1, description="Заголовок User-Agent.")

    history_file: Path = Field(
        Path("~/.newshub/search_history.json"), description="Файл истории поиска."
    )
    history_limit: int = Field(5, ge=1, description="Сколько последних запросов хранить.")

    @field_validator("news_api_base_url", "reader_base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("history_file", mode="after")
    def _expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def news_api_url(self) -> str:
        return str(self.news_api_base_url).rstrip("/")

    @property
    def reader_url(self) -> str:
        return str(self.reader_base_url).rstrip("/")

    def is_news_api_key_configured(self) -> bool:
        return bool(self.news_api_key) and self.news_api_key != API_KEY_PLACEHOLDER

    def has_reader_credential(self) -> bool:
        return bool(self.reader_api_key.strip())

    def masked(self) -> dict[str, Any]:
        """Конфиг в виде словаря для вывода, ключи замаскированы."""
        data = self.model_dump(mode="json")
        for key in ("news_api_key", "reader_api_key"):
            if data.get(key):
                data[key] = data[key][:4] + "…"
        return data


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _apply_env(data: dict[str, Any]) -> dict[str, Any]:
    merged = dict(data)
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            merged[field_name] = value
    return merged


def default_config() -> NewsHubConfig:
    """Конфиг по умолчанию (без файла), с учётом переменных окружения."""
    return NewsHubConfig(**_apply_env({}))


def load_config(path: Union[str, Path, None]) -> NewsHubConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект NewsHubConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return NewsHubConfig(**_apply_env(data))
