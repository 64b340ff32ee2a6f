"""
Doctor use case — report the local Ruby / Rails toolchain.

Read-only: runs the detectors and lists the options each supported
Rails range offers. Never installs or writes anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from create_rails_app.core.compatibility import matrix
from create_rails_app.core.detection.rails_versions import RailsVersionDetector
from create_rails_app.core.detection.runtime import RuntimeDetector, RuntimeInfo
from create_rails_app.core.options import catalog


@dataclass
class DoctorReport:
    """Toolchain snapshot."""

    runtime: RuntimeInfo = field(default_factory=RuntimeInfo)
    installed_rails: dict[str, str] = field(default_factory=dict)
    options_by_range: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "runtime": self.runtime.to_dict(),
            "rails": dict(self.installed_rails),
            "options": {
                requirement: list(keys)
                for requirement, keys in self.options_by_range.items()
            },
        }


def run_doctor(
    runtime_detector: RuntimeDetector | None = None,
    rails_detector: RailsVersionDetector | None = None,
    table: tuple[matrix.Entry, ...] = matrix.TABLE,
) -> DoctorReport:
    runtime_detector = runtime_detector or RuntimeDetector()
    rails_detector = rails_detector or RailsVersionDetector()

    return DoctorReport(
        runtime=runtime_detector.detect(),
        installed_rails=rails_detector.detect(),
        options_by_range={
            str(entry.parsed_requirement): entry.supported_keys(catalog.ORDER)
            for entry in table
        },
    )
