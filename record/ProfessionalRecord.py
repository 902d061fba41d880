# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: ProfessionalRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
VALID_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)

# Fields the answer is allowed to be grounded on
GROUNDING_FIELDS = ("name", "specialty", "registry_number", "city", "office")


@dataclass(frozen=True)
class ProfessionalRecord:
    """One entry of the official registry. Read-only input to the pipeline."""
    id: str
    name: str
    specialty: str
    registry_number: str
    city: str
    status: str
    office: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("record id must not be empty")
        if self.status not in VALID_STATUSES:
            raise ValueError(f"record {self.id!r} has invalid status {self.status!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProfessionalRecord":
        """
        Build a record from a stored dict. The legacy key "registry" is
        accepted as an alias for "registry_number".
        """
        registry = data.get("registry_number")
        if registry is None:
            registry = data.get("registry", "")

        status = str(data.get("status") or STATUS_ACTIVE).strip().lower()

        return cls(
            id=str(data.get("id", "")).strip(),
            name=str(data.get("name", "")).strip(),
            specialty=str(data.get("specialty", "")).strip(),
            registry_number=str(registry).strip(),
            city=str(data.get("city", "")).strip(),
            status=status,
            office=str(data.get("office", "")).strip(),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def document_text(self) -> str:
        """
        Deterministic text used to embed this record. Never used as a search key.
        """
        return (
            f"professional: name={self.name}, specialty={self.specialty}, "
            f"registry={self.registry_number}, city={self.city}, office={self.office}"
        )
