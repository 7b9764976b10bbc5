"""Tests for template rendering."""
import logging

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from templator import Templator, TemplateRenderError
from templator.core.context import NullContext

DHCP_TEMPLATE = """\
host {{ name }} {
{% if ip %}
  fixed-address {{ ip }};
{% endif %}
{% for group in groups %}
  # group {{ group }}
{% endfor %}
}
"""


class TestRender:
    """Templator.render evaluates text against the context."""

    def test_plain_text_is_unchanged(self):
        text = "#!/bin/bash\necho 'power on'\n\n"
        assert Templator().render(text) == text
        assert Templator({"a": 1}).render(text) == text

    def test_empty_template(self):
        assert Templator().render("") == ""

    def test_mapping_context(self, node_data):
        assert Templator(node_data).render("{{ name }} {{ ip }}") == "node01 10.10.0.1"

    def test_object_context(self, node):
        result = Templator(node).render("{{ name }}/{{ fqdn() }}/{{ fqdn('lab') }}")
        assert result == "node01/node01.cluster.local/node01.lab"

    def test_none_renders_empty(self, node_data):
        assert Templator(node_data).render("gw={{ gateway }}") == "gw="

    def test_control_lines_leave_no_blank_lines(self, node_data):
        expected = "host node01 {\n  fixed-address 10.10.0.1;\n  # group compute\n  # group gpu\n}\n"
        assert Templator(node_data).render(DHCP_TEMPLATE) == expected

    def test_indented_control_lines_are_trimmed(self):
        text = "pools:\n  {% for p in pools %}\n  - {{ p }}\n  {% endfor %}\ndone\n"
        assert Templator({"pools": ["a", "b"]}).render(text) == "pools:\n  - a\n  - b\ndone\n"

    @pytest.mark.parametrize("context", [{}, None])
    def test_engine_globals_are_available(self, context):
        templator = Templator(context)
        assert templator.render("{% for i in range(3) %}{{ i }}{% endfor %}") == "012"
        text = "{% set ns = namespace(n=1) %}{% set ns.n = ns.n + 1 %}{{ ns.n }}"
        assert templator.render(text) == "2"
        assert templator.render("{{ dict(a=1)['a'] }}") == "1"

    def test_mid_line_tags_keep_line_breaks(self):
        text = "a={% if x %}1{% endif %}\nb=2\n"
        assert Templator({"x": True}).render(text) == "a=1\nb=2\n"
        assert Templator({"x": False}).render(text) == "a=\nb=2\n"

    def test_text_after_tag_keeps_indentation(self):
        text = "  {% if x %}value\n{% endif %}\nend\n"
        assert Templator({"x": True}).render(text) == "  value\nend\n"

    def test_standalone_comment_lines_are_dropped(self):
        text = "a\n  {# managed by templator #}\nb\n"
        assert Templator().render(text) == "a\nb\n"

    def test_several_tags_on_one_line(self):
        text = "{% set a = 1 %}{% set b = 2 %}\n{{ a + b }}\n"
        assert Templator().render(text) == "3\n"

    def test_binding_is_reused(self, node_data):
        templator = Templator(node_data)
        binding = templator.binding
        templator.render("{{ name }}")
        templator.render("{{ ip }}")
        assert templator.binding is binding

    def test_context_is_not_mutated(self, node_data):
        before = dict(node_data)
        Templator(node_data).render("{% set name = 'other' %}{{ name }}")
        assert node_data == before


class TestNullContextRender:
    """Rendering without a context treats every name as absent."""

    def test_missing_fields_render_empty(self):
        assert Templator().render("ip={{ ip }}\n") == "ip=\n"

    def test_conditionals_see_unset_fields(self):
        text = "{% if gateway %}\ngateway {{ gateway }}\n{% endif %}\nend\n"
        assert Templator(None).render(text) == "end\n"

    def test_explicit_null_context(self):
        templator = Templator(NullContext())
        assert isinstance(templator.context, NullContext)
        assert templator.render("[{{ anything }}]") == "[]"


class TestRenderFailures:
    """Failures outside catch_error reach the caller."""

    def test_missing_field_on_real_context_raises(self, node_data):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator(node_data).render("{{ missing_field }}")
        assert isinstance(exc_info.value.__cause__, UndefinedError)
        assert "missing_field" in str(exc_info.value)

    def test_caller_scope_is_not_visible(self):
        secret = "s3cret"  # noqa: F841
        with pytest.raises(TemplateRenderError):
            Templator({}).render("{{ secret }}")

    def test_private_attributes_are_not_visible(self, node):
        with pytest.raises(TemplateRenderError):
            Templator(node).render("{{ _secret }}")

    def test_syntax_error(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator().render("line one\n{% if %}\n")
        assert isinstance(exc_info.value.__cause__, TemplateSyntaxError)
        assert exc_info.value.lineno == 2
        assert str(exc_info.value).startswith("line 2:")

    def test_raising_expression(self, node):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator(node).render("{{ bmc_address() }}")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "no BMC configured" in str(exc_info.value)

    @pytest.mark.parametrize("text, cause", [
        ("{{ a // 0 }}", ZeroDivisionError),
        ("{{ items[5] }}", UndefinedError),
        ("{{ a() }}", TypeError),
    ])
    def test_failure_keeps_original_cause(self, text, cause):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator({"a": 1, "items": [1]}).render(text)
        assert isinstance(exc_info.value.__cause__, cause)
        assert cause.__name__ in str(exc_info.value)

    def test_failure_reports_template_line(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator({"a": 1}).render("first\nsecond\n{{ a // 0 }}\n")
        assert exc_info.value.lineno == 3
        assert str(exc_info.value).startswith("line 3:")

    def test_compile_reports_syntax_only(self):
        Templator().compile("{{ never_rendered }}")
        with pytest.raises(TemplateRenderError):
            Templator().compile("{% for %}")


class TestTemplateHelpers:
    """nil_to_null and catch_error are callable from templates."""

    def test_nil_to_null(self, node_data):
        text = "gateway: {{ nil_to_null(gateway) }}\nip: {{ nil_to_null(ip) }}\n"
        assert Templator(node_data).render(text) == "gateway: null\nip: 10.10.0.1\n"

    def test_nil_to_null_with_null_context(self):
        assert Templator().render("{{ nil_to_null(ip) }}") == "null"

    def test_catch_error_call_block(self, node, caplog):
        text = "bmc: {% call catch_error() %}{{ bmc_address() }}{% endcall %}\n"
        assert Templator(node).render(text) == "bmc: Error (See Logs)\n"
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1

    def test_catch_error_callable(self, node, caplog):
        assert Templator(node).render("{{ catch_error(bmc_address) }}") == "Error (See Logs)"
        assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1

    def test_catch_error_undefined_inside_block(self, node_data):
        text = "{% call catch_error() %}{{ missing.upper() }}{% endcall %}"
        assert Templator(node_data).render(text) == "Error (See Logs)"

    def test_catch_error_passes_success_through(self, node, caplog):
        text = "{% call catch_error() %}{{ fqdn() }}{% endcall %}"
        assert Templator(node).render(text) == "node01.cluster.local"
        assert [r for r in caplog.records if r.levelno == logging.ERROR] == []

    def test_failure_outside_block_still_raises(self, node):
        text = "{% call catch_error() %}ok{% endcall %} {{ bmc_address() }}"
        with pytest.raises(TemplateRenderError):
            Templator(node).render(text)


class TestStandaloneTagLines:
    """Only lines made entirely of control tags lose their newline."""

    def test_whitespace_control_markers(self):
        text = "a\n  {%- if x -%}\n  b\n{% endif %}\n"
        assert Templator({"x": True}).render(text) == "ab\n"

    def test_line_numbers_survive_trimming(self):
        text = "{% if a %}\n{% set b = 2 %}\n{{ a // 0 }}\n{% endif %}\n"
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator({"a": 1}).render(text)
        assert exc_info.value.lineno == 3

    def test_syntax_error_line_after_trimmed_lines(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            Templator().render("{% if a %}\n{% endif %}\n{% for %}\n")
        assert exc_info.value.lineno == 3
