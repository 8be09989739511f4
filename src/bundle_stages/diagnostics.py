"""Build diagnostics channel: collected warnings and fatal errors."""

from __future__ import annotations

from dataclasses import dataclass, field

from bundle_stages.logging import BuildEvent, JsonlBuildLog, utc_timestamp


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """Single diagnostic raised by a stage."""

    level: str
    stage: str
    message: str
    module_id: str | None = None


class BuildError(Exception):
    """Raised when a stage fails the build for the current module or chunk."""

    def __init__(self, stage: str, reason: str) -> None:
        super().__init__(reason)
        self.stage = stage
        self.reason = reason


@dataclass(slots=True)
class BuildDiagnostics:
    """Per-build collector of warnings, errors and info reports."""

    build_log: JsonlBuildLog | None = None
    _items: list[Diagnostic] = field(default_factory=list)

    def warn(self, stage: str, message: str, *, module_id: str | None = None) -> None:
        """Record a non-fatal warning; the build continues."""
        self._record(Diagnostic(level="warning", stage=stage, message=message, module_id=module_id))

    def info(
        self,
        stage: str,
        message: str,
        *,
        module_id: str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> None:
        """Record an informational report."""
        self._record(
            Diagnostic(level="info", stage=stage, message=message, module_id=module_id),
            metadata=metadata,
        )

    def error(self, stage: str, message: str, *, module_id: str | None = None) -> BuildError:
        """Record a fatal error and return it for the caller to raise."""
        self._record(Diagnostic(level="error", stage=stage, message=message, module_id=module_id))
        return BuildError(stage=stage, reason=message)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(item for item in self._items if item.level == "warning")

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(item for item in self._items if item.level == "error")

    def all(self) -> tuple[Diagnostic, ...]:
        """Return every diagnostic in emission order."""
        return tuple(self._items)

    def _record(self, item: Diagnostic, metadata: dict[str, object] | None = None) -> None:
        self._items.append(item)
        if self.build_log is None:
            return
        self.build_log.append(
            BuildEvent(
                timestamp=utc_timestamp(),
                stage=item.stage,
                level=item.level,
                message=item.message,
                module_id=item.module_id,
                metadata=dict(metadata or {}),
            )
        )
