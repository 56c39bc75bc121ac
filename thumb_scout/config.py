# === FILE: thumb_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации ThumbScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LookupConfig(BaseModel):
    """Настройки поиска изображения на связанной странице."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field("ThumbScout/1.0", min_length=1, description="Заголовок User-Agent.")
    accept: str = Field("text/html", min_length=1, description="Заголовок Accept для запроса страницы.")
    allowed_content_types: tuple[str, ...] = Field(
        ("text/html", "application/json"),
        min_length=1,
        description="Допустимые Content-Type ответа (поиск подстроки).",
    )
    strict_protocol: bool = Field(True, description="Строгая проверка протокола URL.")
    selectors: list[str] = Field(default_factory=list, description="CSS-селекторы по умолчанию для CLI.")
    attributes: list[str] = Field(
        default_factory=lambda: ["src", "href", "content"],
        min_length=1,
        description="Атрибуты с URL в порядке приоритета.",
    )

    @field_validator("allowed_content_types", mode="before")
    def _lower_content_types(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(str(item).strip().lower() for item in v)
        return v


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


def load_config(path: Union[str, Path, None] = None) -> LookupConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект LookupConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл: FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return LookupConfig()
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

    return LookupConfig(**data)


__all__ = ["LookupConfig", "load_config"]
