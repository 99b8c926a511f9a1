from pydantic import BaseModel, Field
from typing import Literal


class DisplayConfig(BaseModel):
    show_context: bool = False
    show_duplicates: bool = False


class AnnovateConfig(BaseModel):
    meta_file: str = ".annovate"
    timestamp_format: str = "%d.%m.%Y %H:%M:%S"
    context_prefix: str = "annovate program"
    creation_reason: str = "new annovate file"
    list_key: str = "description"
    include_dotfiles: bool = False
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
