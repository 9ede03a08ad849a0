"""
Résumé record ➜ HTML document, one Jinja2 layout per template.

Rendering is a pure function of (record, template, print_mode). Print mode
only swaps the page CSS (A4 @page box, no screen padding or shadow); the
content markup is the same in both modes.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .schema_resume import ResumeRecord

_TEMPLATE_DIR = Path(__file__).parent / "templates"
env = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=True,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)

PREVIEW_ELEMENT_ID = "resume-preview-content"
NOT_IMPLEMENTED_FILE = "not_implemented.html"


class TemplateType(str, Enum):
    SOFTWARE_ENGINEER = "Software Engineer Chronological"
    ENHANCED_CHRONOLOGICAL = "Enhanced Chronological"
    STRATEGIC_HYBRID = "Strategic Hybrid"
    ATS_OPTIMIZED = "ATS-Optimized"
    VISUAL_STRATEGIC = "Visual-Strategic"
    REVERSE_CHRONOLOGICAL = "Reverse-Chronological"
    FUNCTIONAL = "Functional Skills-Focused"
    COMBINED_HYBRID = "Combined Hybrid"


# None marks a picker entry whose layout has not been built yet
LAYOUTS: Dict[TemplateType, Optional[str]] = {
    TemplateType.SOFTWARE_ENGINEER: "software_engineer.html",
    TemplateType.ENHANCED_CHRONOLOGICAL: "enhanced_chronological.html",
    TemplateType.STRATEGIC_HYBRID: "strategic_hybrid.html",
    TemplateType.ATS_OPTIMIZED: "ats_optimized.html",
    TemplateType.VISUAL_STRATEGIC: "visual_strategic.html",
    TemplateType.REVERSE_CHRONOLOGICAL: None,
    TemplateType.FUNCTIONAL: None,
    TemplateType.COMBINED_HYBRID: None,
}

_missing = set(TemplateType) - set(LAYOUTS)
if _missing:
    raise RuntimeError(f"templates without a layout entry: {sorted(t.name for t in _missing)}")


def resolve_layout(template: Union[TemplateType, str]) -> Optional[str]:
    """Layout file for a template id, or None when nothing renders it."""
    try:
        return LAYOUTS[TemplateType(template)]
    except ValueError:
        return None


def is_implemented(template: Union[TemplateType, str]) -> bool:
    return resolve_layout(template) is not None


def render_resume(
    record: ResumeRecord,
    template: Union[TemplateType, str],
    print_mode: bool = False,
) -> str:
    """Render résumé → standalone HTML with inline CSS."""
    layout = resolve_layout(template)
    label = template.value if isinstance(template, TemplateType) else str(template)
    return env.get_template(layout or NOT_IMPLEMENTED_FILE).render(
        r=record,
        c=record.contact,
        template_label=label,
        print_mode=print_mode,
        preview_id=PREVIEW_ELEMENT_ID,
    )
