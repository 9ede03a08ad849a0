"""Shared fixtures for the ResumeRevamp test suite."""

import copy
import json

import pytest

from resume_revamp.llm_client import LLMResponse
from resume_revamp.sample import SAMPLE_RESUME

PAYLOAD = {
    "fullName": "Jamie Rivera",
    "jobTitle": "Data Engineer",
    "contact": {
        "email": "jamie@example.org",
        "phone": "+1 555 0100",
        "location": "Denver, CO",
        "linkedin": None,
        "website": "jamie.dev",
    },
    "summary": "Engineer building reliable batch and streaming pipelines.",
    "skills": ["Python", "Spark", "Airflow"],
    "experience": [
        {
            "role": "Data Engineer",
            "company": "Northwind",
            "location": "Remote",
            "dates": "2020 - Present",
            "description": ["Cut nightly load time by 40%.", "Owned the Kafka ingest tier."],
        },
        {
            "role": "Analyst",
            "company": "Contoso",
            "dates": "2017 - 2020",
            "description": "Built the weekly revenue dashboard.",
        },
    ],
    "education": [{"degree": "B.S. Mathematics", "school": "CU Boulder", "dates": "2013 - 2017"}],
}


class FakeChat:
    """Stands in for llm_client.chat: records calls, replays one reply."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def __call__(self, model, messages, json_mode=False):
        self.calls.append({"model": model, "messages": messages, "json_mode": json_mode})
        if self.error is not None:
            raise self.error
        return LLMResponse(self.reply)


@pytest.fixture
def sample():
    return SAMPLE_RESUME


@pytest.fixture
def payload():
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def payload_json(payload):
    return json.dumps(payload)


@pytest.fixture
def fake_chat():
    return FakeChat
