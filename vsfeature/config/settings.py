"""
Settings — 特征构建与演示程序的配置。
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "vsfeature_settings.json"


@dataclass
class Settings:
    """所有可配置项"""

    # 去畸变迭代
    undistort_max_iter: int = 100
    undistort_eps: float = 1e-12

    # 日志
    log_level: str = "INFO"

    # 演示用默认相机
    default_fx: float = 600.0
    default_fy: float = 600.0
    default_cx: float = 320.0
    default_cy: float = 240.0

    # 标定噪声
    noise_focal_scale: float = 1.02
    noise_center_offset: float = 2.0

    @classmethod
    def load(cls, path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
        """从 JSON 文件读取配置，文件不存在时使用默认值"""
        p = Path(path)
        if not p.exists():
            logger.info("Settings file not found (%s), using defaults", p)
            return cls()

        with open(p, "r") as f:
            data = json.load(f)

        # 只接受 dataclass 中存在的字段
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning("Ignoring unknown settings: %s", sorted(unknown))
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered)

    def save(self, path: str | Path = DEFAULT_SETTINGS_PATH) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w") as f:
            json.dump(dataclasses.asdict(self), f, indent=2)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
