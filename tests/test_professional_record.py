# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Description: test_professional_record.py
# -----------------------------------------------------------------------------
import pytest

from stubs import ANA
from record.ProfessionalRecord import ProfessionalRecord


def test_from_dict_accepts_legacy_registry_key():
    rec = ProfessionalRecord.from_dict(ANA)

    assert rec.id == "1"
    assert rec.registry_number == "RM123"
    assert rec.is_active


def test_document_text_is_deterministic_and_carries_grounding_fields():
    rec = ProfessionalRecord.from_dict(ANA)

    text = rec.document_text()
    assert text == ProfessionalRecord.from_dict(dict(ANA)).document_text()
    for value in ("Ana Pérez", "Neonatología", "RM123", "Bucaramanga", "Clínica X"):
        assert value in text
    assert "active" not in text


def test_status_is_normalised_and_validated():
    rec = ProfessionalRecord.from_dict({**ANA, "status": " Inactive "})
    assert rec.status == "inactive"
    assert not rec.is_active

    with pytest.raises(ValueError):
        ProfessionalRecord.from_dict({**ANA, "status": "retired"})


def test_empty_id_is_rejected():
    with pytest.raises(ValueError):
        ProfessionalRecord.from_dict({**ANA, "id": ""})


def test_to_dict_uses_canonical_field_names():
    data = ProfessionalRecord.from_dict(ANA).to_dict()
    assert set(data) == {"id", "name", "specialty", "registry_number", "city", "status", "office"}
