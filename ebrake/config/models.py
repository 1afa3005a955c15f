import shlex
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_HANDBRAKE_COMMAND = "HandBrakeCLI"
DEFAULT_HANDBRAKE_OPTIONS = "--encoder x264 --encoder-preset fast --optimize"
DEFAULT_SOURCE_EXTENSIONS = [".mp4", ".mkv", ".avi"]
DEFAULT_TARGET_EXTENSION = ".mp4"
DEFAULT_LOG_PATH = "/tmp/ebrake/ebrake.log"
TARGET_EXTENSION_KEYS = ("targetExtension", "targetExtensions", "target_extension")


def normalize_extension(ext: str) -> str:
    """Prefixes a dot when missing. Case is kept: matching is case-sensitive."""
    ext = ext.strip()
    if not ext:
        raise ValueError("Extension must not be empty")
    return ext if ext.startswith(".") else f".{ext}"


def split_options(options: Union[str, List[str]]) -> List[str]:
    """Splits an option string with shell rules; lists pass through as tokens."""
    if isinstance(options, str):
        try:
            return shlex.split(options)
        except ValueError as exc:
            raise ValueError(f"Cannot parse encoder options {options!r}: {exc}") from exc
    return [str(token) for token in options]


class EbrakeConfig(BaseModel):
    """Contents of the YAML config file (~/.ebrake.yaml).

    Keys may use the original camelCase spelling or snake_case.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    handbrake_command: str = Field(
        default=DEFAULT_HANDBRAKE_COMMAND,
        min_length=1,
        validation_alias=AliasChoices("handBrakeCommand", "handbrake_command"),
    )
    handbrake_options: List[str] = Field(
        default_factory=lambda: split_options(DEFAULT_HANDBRAKE_OPTIONS),
        validation_alias=AliasChoices("handBrakeOptions", "handbrake_options"),
    )
    source_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS),
        validation_alias=AliasChoices("sourceExtensions", "source_extensions"),
    )
    target_extension: str = Field(
        default=DEFAULT_TARGET_EXTENSION,
        validation_alias=AliasChoices(*TARGET_EXTENSION_KEYS),
    )
    overwrite: bool = False
    log_path: str = DEFAULT_LOG_PATH
    debug: bool = False

    @model_validator(mode="before")
    @classmethod
    def validate_single_target_extension(cls, data):
        if isinstance(data, dict):
            present = [key for key in TARGET_EXTENSION_KEYS if key in data]
            if len(present) > 1:
                raise ValueError(
                    f"Set the target extension only once; found {', '.join(present)} (they are alternative spellings)"
                )
        return data

    @field_validator("handbrake_options", mode="before")
    @classmethod
    def validate_options(cls, v):
        if v is None:
            return []
        if not isinstance(v, (str, list)):
            raise ValueError("handBrakeOptions must be a string or a list of strings")
        return split_options(v)

    @field_validator("source_extensions", mode="before")
    @classmethod
    def validate_source_extensions(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple, set)):
            raise ValueError("sourceExtensions must be a list of extensions")
        return [normalize_extension(str(ext)) for ext in v]

    @field_validator("target_extension")
    @classmethod
    def validate_target_extension(cls, v: str) -> str:
        return normalize_extension(v)


class EncodeConfiguration(BaseModel):
    """Immutable settings for one run, handed to the core pipeline."""
    model_config = ConfigDict(frozen=True)

    source_root: Path
    target_root: Path
    recognized_extensions: FrozenSet[str] = Field(default_factory=lambda: frozenset(DEFAULT_SOURCE_EXTENSIONS))
    target_extension: str = DEFAULT_TARGET_EXTENSION
    encoder_command: str = DEFAULT_HANDBRAKE_COMMAND
    encoder_option_tokens: Tuple[str, ...] = Field(default_factory=lambda: tuple(split_options(DEFAULT_HANDBRAKE_OPTIONS)))
    overwrite: bool = False
    dry_run: bool = False

    @field_validator("target_extension")
    @classmethod
    def validate_target_extension(cls, v: str) -> str:
        return normalize_extension(v)

    @classmethod
    def from_file_config(
        cls,
        file_config: EbrakeConfig,
        source_root: Path,
        target_root: Path,
        overwrite: Optional[bool] = None,
        dry_run: bool = False,
    ) -> "EncodeConfiguration":
        """Builds the run value; an explicit ``overwrite`` wins over the file setting."""
        return cls(
            source_root=source_root,
            target_root=target_root,
            recognized_extensions=frozenset(file_config.source_extensions),
            target_extension=file_config.target_extension,
            encoder_command=file_config.handbrake_command,
            encoder_option_tokens=tuple(file_config.handbrake_options),
            overwrite=file_config.overwrite if overwrite is None else overwrite,
            dry_run=dry_run,
        )
