"""Unit tests for template dispatch and HTML rendering."""

import pytest
from bs4 import BeautifulSoup

from resume_revamp import editor
from resume_revamp.generator_rule import (
    LAYOUTS,
    PREVIEW_ELEMENT_ID,
    TemplateType,
    is_implemented,
    render_resume,
    resolve_layout,
)

IMPLEMENTED = [t for t in TemplateType if LAYOUTS[t]]


def _content(html):
    return BeautifulSoup(html, "html.parser").find(id=PREVIEW_ELEMENT_ID)


@pytest.mark.unit
def test_every_template_has_a_layout_entry():
    assert set(LAYOUTS) == set(TemplateType)


@pytest.mark.unit
def test_five_layouts_are_implemented():
    assert len(IMPLEMENTED) == 5
    assert not is_implemented(TemplateType.FUNCTIONAL)


@pytest.mark.unit
def test_unknown_template_resolves_to_nothing():
    assert resolve_layout("Infographic Deluxe") is None


@pytest.mark.unit
@pytest.mark.parametrize("template", IMPLEMENTED)
def test_layout_shows_record(sample, template):
    text = _content(render_resume(sample, template)).get_text(" ")

    assert sample.full_name in text
    assert sample.contact.email in text
    assert sample.summary in text
    for skill in sample.skills:
        assert skill in text
    for exp in sample.experience:
        assert exp.company in text
        assert exp.dates in text
        for line in exp.description:
            assert line in text
    for edu in sample.education:
        assert edu.school in text
        assert edu.degree in text


@pytest.mark.unit
@pytest.mark.parametrize("template", IMPLEMENTED)
def test_render_is_deterministic(sample, template):
    assert render_resume(sample, template) == render_resume(sample, template)


@pytest.mark.unit
@pytest.mark.parametrize("template", IMPLEMENTED)
def test_print_mode_keeps_content(sample, template):
    screen = _content(render_resume(sample, template))
    printed = _content(render_resume(sample, template, print_mode=True))
    assert str(screen) == str(printed)


@pytest.mark.unit
def test_print_mode_adds_page_box(sample):
    html = render_resume(sample, TemplateType.SOFTWARE_ENGINEER, print_mode=True)
    assert "@page" in html
    assert "@page" not in render_resume(sample, TemplateType.SOFTWARE_ENGINEER)


@pytest.mark.unit
@pytest.mark.parametrize("template", [TemplateType.COMBINED_HYBRID, "Infographic Deluxe"])
def test_unimplemented_template_renders_notice(sample, template):
    content = _content(render_resume(sample, template))
    assert "Template Not Implemented Yet" in content.get_text()
    assert str(getattr(template, "value", template)) in content.get_text()


@pytest.mark.unit
def test_markup_in_fields_is_escaped(sample):
    record = editor.set_field(sample, "summary", "<script>alert(1)</script>")
    html = render_resume(record, TemplateType.ATS_OPTIMIZED)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.unit
def test_edit_shows_in_preview(sample):
    record = editor.set_skill(sample, 0, "Kubernetes")
    assert "Kubernetes" in render_resume(record, TemplateType.VISUAL_STRATEGIC)
