"""
Unit Tests for notification template rendering
"""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from microservices.notification_service.models import NotificationMetadata, NotificationTemplate
from microservices.notification_service.protocols import TemplateRenderError
from microservices.notification_service.template_renderer import render_template, render_text

pytestmark = pytest.mark.unit


@dataclass
class FooBar:
    Foo: str
    Bar: str


class Profile(BaseModel):
    Name: str
    Age: int


def _template(template_id: str, headings: dict, contents: dict) -> NotificationTemplate:
    return NotificationTemplate(id=template_id, headings=headings, contents=contents)


class TestRenderTemplate:
    """Test render_template"""

    def test_plain_text_without_variables(self):
        template = _template(
            "test_template",
            {"en": "Test headings en", "vi": "Test headings vi"},
            {"en": "Test contents en", "vi": "Test contents vi"},
        )

        result = render_template(template, None)

        assert result.id == "test_template"
        assert result.headings == {"en": "Test headings en", "vi": "Test headings vi"}
        assert result.contents == {"en": "Test contents en", "vi": "Test contents vi"}

    @pytest.mark.parametrize("variables", [
        FooBar(Foo="foo", Bar="bar"),
        {"Foo": "foo", "Bar": "bar"},
    ])
    def test_fields_are_substituted(self, variables):
        template = _template(
            "test_template_1",
            {"en": "Test headings {{.Foo}}", "vi": "Test headings {{.Bar}}"},
            {"en": "Test contents {{.Foo}}", "vi": "Test contents {{.Bar}}"},
        )

        result = render_template(template, variables)

        assert result.id == "test_template_1"
        assert result.headings == {"en": "Test headings foo", "vi": "Test headings bar"}
        assert result.contents == {"en": "Test contents foo", "vi": "Test contents bar"}

    def test_input_template_is_not_mutated(self):
        template = _template("t", {"en": "Hi {{.Name}}"}, {"en": "Body"})

        render_template(template, {"Name": "Ann"})

        assert template.headings == {"en": "Hi {{.Name}}"}

    def test_metadata_is_not_carried_over(self):
        template = NotificationTemplate(
            id="t",
            headings={"en": "Hi"},
            metadata=NotificationMetadata(url="https://example.com"),
        )

        result = render_template(template, None)

        assert result.metadata == NotificationMetadata()

    def test_heading_and_content_locales_are_independent(self):
        template = _template("t", {"en": "Hi {{.Name}}"}, {"fr": "Salut {{.Name}}", "de": "Hallo"})

        result = render_template(template, {"Name": "Ann"})

        assert result.headings == {"en": "Hi Ann"}
        assert result.contents == {"fr": "Salut Ann", "de": "Hallo"}

    def test_rendering_rendered_template_is_identity(self):
        template = _template("t", {"en": "Hi {{.Name}}"}, {"en": "Welcome {{.Name}}"})

        once = render_template(template, {"Name": "Ann"})
        twice = render_template(once, {"Name": "Bob", "Other": 1})

        assert twice.headings == once.headings
        assert twice.contents == once.contents

    def test_unknown_field_fails_whole_render(self):
        template = _template("t", {"en": "Hi {{.Name}}"}, {"en": "Code {{.Code}}"})

        with pytest.raises(TemplateRenderError) as exc_info:
            render_template(template, {"Name": "Ann"})

        assert ".Code" in str(exc_info.value)
        assert exc_info.value.context["template_id"] == "t"

    def test_field_without_variables_fails(self):
        template = _template("t", {"en": "Hi {{.Name}}"}, {})

        with pytest.raises(TemplateRenderError):
            render_template(template, None)

    def test_unclosed_action_fails(self):
        template = _template("t", {"en": "Hi {{.Name"}, {})

        with pytest.raises(TemplateRenderError):
            render_template(template, {"Name": "Ann"})


class TestRenderText:
    """Test placeholder resolution rules"""

    def test_dotted_path_through_mapping_and_model(self):
        variables = {"User": Profile(Name="Ann", Age=31)}

        assert render_text("{{.User.Name}} is {{.User.Age}}", variables) == "Ann is 31"

    def test_whitespace_inside_action(self):
        assert render_text("Hi {{ .Name }}!", {"Name": "Ann"}) == "Hi Ann!"

    def test_trim_markers_remove_surrounding_space(self):
        assert render_text("Hi   {{- .Name -}}   !", {"Name": "Ann"}) == "HiAnn!"

    def test_dot_renders_whole_bag(self):
        assert render_text("Code: {{.}}", "A1") == "Code: A1"

    def test_booleans_and_none(self):
        variables = {"Flag": True, "Empty": None}

        assert render_text("{{.Flag}}/{{.Empty}}/", variables) == "true//"

    @pytest.mark.parametrize("text", [
        "{{Name}}",
        "{{.Name | upper}}",
        "{{if .Name}}x{{end}}",
        "{{._private}}",
    ])
    def test_unsupported_actions_fail(self, text):
        with pytest.raises(TemplateRenderError):
            render_text(text, {"Name": "Ann", "_private": "x"})

    def test_missing_nested_field_fails(self):
        with pytest.raises(TemplateRenderError):
            render_text("{{.User.Email}}", {"User": {"Name": "Ann"}})

    def test_closing_braces_alone_are_text(self):
        assert render_text("a }} b", None) == "a }} b"
