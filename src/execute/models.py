"""Request and result models for toolchain execution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

TOOLCHAIN_ENV_KEYS = frozenset(
    {
        "GOROOT",
        "GOPATH",
        "GOPROXY",
        "GOPRIVATE",
        "GOFLAGS",
        "GO111MODULE",
        "GOOS",
        "GOARCH",
        "CGO_ENABLED",
    }
)


def _validate_env_keys(env: dict[str, str]) -> dict[str, str]:
    unknown = sorted(set(env) - TOOLCHAIN_ENV_KEYS)
    if unknown:
        msg = (
            f"Unsupported environment override(s): {', '.join(unknown)}. "
            f"Valid keys: {', '.join(sorted(TOOLCHAIN_ENV_KEYS))}"
        )
        raise ValueError(msg)
    return env


class RunJob(BaseModel):
    """Source to run, optionally backed by a file on disk."""

    code: str
    path: str | None = Field(
        default=None,
        description="File to overwrite and run; a scratch file is used when unset",
    )
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: dict[str, str]) -> dict[str, str]:
        return _validate_env_keys(v)


class CommandJob(BaseModel):
    """A whitespace-tokenized command line, e.g. ``go test ./...``."""

    command: str
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: dict[str, str]) -> dict[str, str]:
        return _validate_env_keys(v)


class RunResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ToolchainReport(BaseModel):
    """Host details and ``go env`` output for the settings panel."""

    model_config = ConfigDict(frozen=True)

    executable: str
    host_os: str
    host_arch: str
    env_vars: str
    error: str | None = None


__all__ = [
    "TOOLCHAIN_ENV_KEYS",
    "CommandJob",
    "RunJob",
    "RunResult",
    "ToolchainReport",
]
