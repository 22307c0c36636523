from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_FILE = "textsplitter.yaml"


@dataclass
class Config:
    chunk_size: int = 3000
    # Bounds and step used when the chunk size is adjusted interactively
    min_chunk_size: int = 500
    max_chunk_size: int = 8000
    size_step: int = 500
    host: str = "127.0.0.1"
    port: int = 8080
    port_search_range: int = 100  # how many ports above `port` to try when busy
    open_browser: bool = True
    browser_delay: float = 0.5  # seconds to wait for the server before opening the browser
    log_dir: Optional[Path] = None  # no file log unless set
    log_level: str = "WARNING"  # used unless --verbose is given

    @staticmethod
    def load(config_file: Path | str = DEFAULT_CONFIG_FILE) -> "Config":
        path = Path(config_file)
        cfg = Config()
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            # Map YAML keys to dataclass fields if present
            if "chunk_size" in data:
                cfg.chunk_size = int(data["chunk_size"])
            if "min_chunk_size" in data:
                cfg.min_chunk_size = int(data["min_chunk_size"])
            if "max_chunk_size" in data:
                cfg.max_chunk_size = int(data["max_chunk_size"])
            if "size_step" in data:
                cfg.size_step = int(data["size_step"])
            if "host" in data and data["host"]:
                cfg.host = str(data["host"])
            if "port" in data:
                cfg.port = int(data["port"])
            if "port_search_range" in data:
                cfg.port_search_range = int(data["port_search_range"])
            if "open_browser" in data:
                cfg.open_browser = bool(data["open_browser"])
            if "browser_delay" in data:
                cfg.browser_delay = float(data["browser_delay"])
            if "log_dir" in data and data["log_dir"]:
                cfg.log_dir = Path(data["log_dir"]).expanduser().resolve()
            if "log_level" in data and data["log_level"]:
                cfg.log_level = str(data["log_level"]).upper()

        return cfg
