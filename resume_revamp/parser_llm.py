"""
LLM-based résumé extractor.

• Supports multiple LLM providers (OpenAI GPT models, local Ollama models)
• Rewrites while it extracts: bullets become action-oriented, grammar fixed
• Optionally tailors wording to a target job description
• Decodes the reply strictly – any failure surfaces as ExtractionError
"""

from __future__ import annotations
import json, logging, textwrap
from dataclasses import dataclass
from typing import Callable, List, Dict, Protocol, Union

from . import llm_client
from .cleaner import normalise_payload, strip_code_fence
from .config import get_model_for_provider
from .errors import ExtractionError, RecordDecodeError
from .extractor import file_to_text
from .schema_resume import RESUME_SCHEMA, ResumeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileSource:
    data: bytes
    mime_type: str
    name: str = ""


@dataclass(frozen=True)
class TextSource:
    text: str


Source = Union[FileSource, TextSource]


class ResumeExtractor(Protocol):
    """Anything that can turn raw résumé input into a record."""

    def extract(self, source: Source, job_description: str = "") -> ResumeRecord:
        ...


_SYSTEM_PROMPT = textwrap.dedent(
    f"""\
You are an expert Resume Consultant and Professional Writer.
Your task is to extract information from the provided resume and structure it
into JSON. You must IMPROVE the content while extracting it:
1. Rewrite bullet points to be action-oriented and results-driven
   (e.g. "Managed a team" -> "Led a cross-functional team of 10...").
2. If metrics are missing but implied, maximise the impact of the language.
3. Keep the tone professional and modern.
4. Fix any grammar or spelling errors.
5. Return skills as a flat list.
6. IMPORTANT: Do NOT summarise, cut, or truncate the work history. Include ALL
   roles, dates and details found in the source. If the resume is long, the
   output should be long.

Output ONLY valid JSON with exactly this shape (no markdown fences).
contact.email is required; omit "projects" if the resume lists none:

{json.dumps(RESUME_SCHEMA, indent=2)}
"""
)

_JOB_PROMPT = textwrap.dedent(
    """\

Additionally, tailor the keywords and summary to align with the following job
description provided by the user:
"{job_description}"
"""
)


def build_messages(resume_text: str, job_description: str = "") -> List[Dict[str, str]]:
    system = _SYSTEM_PROMPT
    if job_description.strip():
        system += _JOB_PROMPT.format(job_description=job_description.strip())
    return [
        {"role": "system", "content": system},
        {
            "role": "user",
            "content": "Parse this resume and return the structured data. Rewrite "
            "descriptions to be ATS-friendly and high-impact. Capture all "
            f"experience entries.\n\nResume Text:\n{resume_text}",
        },
    ]


def decode_response(raw: str) -> ResumeRecord:
    """Model reply ➜ record. Fenced replies decode exactly like bare ones."""
    payload = strip_code_fence(raw or "")
    if not payload:
        raise ExtractionError("No data returned from AI")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"reply is not valid JSON: {e}") from e
    try:
        return ResumeRecord.from_dict(normalise_payload(data))
    except RecordDecodeError as e:
        raise ExtractionError(f"reply does not match the résumé shape: {e}") from e


ChatFn = Callable[..., "llm_client.LLMResponse"]


class LLMResumeExtractor:
    """Production collaborator: document text ➜ chat model ➜ record."""

    def __init__(self, model: str | None = None, chat: ChatFn | None = None):
        self.model = model or get_model_for_provider()
        self._chat = chat or llm_client.chat

    def extract(self, source: Source, job_description: str = "") -> ResumeRecord:
        if isinstance(source, FileSource):
            try:
                text = file_to_text(source.data, source.mime_type)
            except ExtractionError:
                raise
            except Exception as e:
                raise ExtractionError(f"could not read {source.name or 'upload'}: {e}") from e
        else:
            text = source.text

        logger.info("Requesting extraction from %s (%d chars)", self.model, len(text))
        try:
            rsp = self._chat(
                model=self.model,
                messages=build_messages(text, job_description),
                json_mode=True,
            )
        except Exception as e:
            raise ExtractionError(f"LLM request failed: {e}") from e

        record = decode_response(rsp.message.content)
        logger.info(
            "Extracted record with %d experience and %d education entries",
            len(record.experience), len(record.education),
        )
        return record


class StaticExtractor:
    """Returns a fixed record; used for demos and tests."""

    def __init__(self, record: ResumeRecord):
        self.record = record
        self.calls = 0

    def extract(self, source: Source, job_description: str = "") -> ResumeRecord:
        self.calls += 1
        return self.record
