"""Unit tests for the résumé record and its camelCase decoding."""

import pytest

from resume_revamp.errors import RecordDecodeError
from resume_revamp.schema_resume import Contact, Experience, ResumeRecord


@pytest.mark.unit
def test_from_dict_maps_camel_case(payload):
    payload["experience"][1]["description"] = ["Built the weekly revenue dashboard."]
    record = ResumeRecord.from_dict(payload)

    assert record.full_name == "Jamie Rivera"
    assert record.job_title == "Data Engineer"
    assert record.contact == Contact(
        email="jamie@example.org", phone="+1 555 0100", location="Denver, CO",
        linkedin=None, website="jamie.dev",
    )
    assert record.skills == ("Python", "Spark", "Airflow")
    assert record.experience[0] == Experience(
        role="Data Engineer", company="Northwind", dates="2020 - Present",
        description=("Cut nightly load time by 40%.", "Owned the Kafka ingest tier."),
        location="Remote",
    )
    assert record.experience[1].location is None
    assert record.education[0].school == "CU Boulder"
    assert record.projects is None


@pytest.mark.unit
def test_from_dict_keeps_entry_order(payload):
    payload["experience"][1]["description"] = []
    record = ResumeRecord.from_dict(payload)
    assert [e.company for e in record.experience] == ["Northwind", "Contoso"]


@pytest.mark.unit
@pytest.mark.parametrize("key", ["fullName", "summary", "contact", "skills", "experience", "education"])
def test_from_dict_requires_fields(payload, key):
    payload["experience"][1]["description"] = []
    del payload[key]
    with pytest.raises(RecordDecodeError, match=key):
        ResumeRecord.from_dict(payload)


@pytest.mark.unit
def test_from_dict_rejects_empty_email(payload):
    payload["experience"][1]["description"] = []
    payload["contact"]["email"] = ""
    with pytest.raises(RecordDecodeError, match="email"):
        ResumeRecord.from_dict(payload)


@pytest.mark.unit
def test_from_dict_rejects_string_description(payload):
    """Shape repair is the cleaner's job; the decoder is strict."""
    with pytest.raises(RecordDecodeError, match="description"):
        ResumeRecord.from_dict(payload)


@pytest.mark.unit
def test_from_dict_rejects_non_object():
    with pytest.raises(RecordDecodeError):
        ResumeRecord.from_dict(["not", "a", "record"])


@pytest.mark.unit
def test_job_title_is_optional(payload):
    payload["experience"][1]["description"] = []
    del payload["jobTitle"]
    assert ResumeRecord.from_dict(payload).job_title == ""


@pytest.mark.unit
def test_projects_decoded_when_present(payload):
    payload["experience"][1]["description"] = []
    payload["projects"] = [{"name": "etl-kit", "description": "Reusable DAGs", "link": "gh/etl-kit"}]
    record = ResumeRecord.from_dict(payload)
    assert record.projects[0].name == "etl-kit"
    assert record.projects[0].link == "gh/etl-kit"


@pytest.mark.unit
def test_to_dict_round_trips_sample(sample):
    data = sample.to_dict()
    assert data["fullName"] == "Alex Morgan"
    assert "projects" not in data
    assert "website" not in data["contact"]
    assert ResumeRecord.from_dict(data) == sample


@pytest.mark.unit
def test_record_is_immutable(sample):
    with pytest.raises(AttributeError):
        sample.full_name = "Someone Else"
