from __future__ import annotations

import pytest

from parse.treesitter_js import ParseError
from rules.config import DEFAULT_HIGHLIGHT_STYLE, ConfigError, TransformOptions
from sfc.extract import ExtractError, SfcDescriptor
from transform.pipeline import transform


class _FailingExtractor:
    def extract(self, document: str) -> SfcDescriptor:
        return SfcDescriptor(errors=(ExtractError("broken markup", 1, 0),))


def test_scenario_single_string_argument() -> None:
    result = transform("src/app.ts", 'console.log("hi")\n')

    assert result.code == 'console.log("app.ts:1:0","hi")\n'
    assert result.map.sources == ["src/app.ts"]


def test_file_without_logging_calls_is_byte_identical() -> None:
    code = "const a = 1;\nfoo(a);\n// console.log(a)\n"

    result = transform("src/app.js", code)

    assert result.code == code


def test_original_arguments_stay_in_order() -> None:
    result = transform("src/app.js", 'console.log(a, b, "c")\n')

    assert result.code == 'console.log("app.js:1:0 ~ a, b, c",a, b, "c")\n'
    assert 'a, b, "c"' in result.code


@pytest.mark.parametrize(
    "code",
    [
        'console.log("%cstyled", "color: red")\n',
        "console.log()\n",
        "console.table(rows)\n",
        "logger.log(message)\n",
        "console.log`tagged`\n",
    ],
)
def test_calls_left_untouched(code: str) -> None:
    assert transform("src/app.js", code).code == code


def test_suppressed_line_is_not_rewritten() -> None:
    code = "console.log(a) // consoleline-disable-line\nconsole.log(b)\n"

    result = transform("src/app.js", code)

    assert result.code == (
        "console.log(a) // consoleline-disable-line\n"
        'console.log("app.js:2:0 ~ b",b)\n'
    )


def test_next_line_directive() -> None:
    code = "// consoleline-disable-next-line\nconsole.log(a)\n"

    assert transform("src/app.js", code).code == code


def test_file_directive_disables_everything() -> None:
    code = "/* consoleline-disable */\nconsole.log(a)\nconsole.warn(b)\n"

    assert transform("src/app.js", code).code == code


def test_path_qualified_directive_only_hits_matching_file() -> None:
    code = "console.log(a) // consoleline-disable-line src/app.js\n"

    assert transform("/repo/src/app.js", code).code == code
    assert transform("/repo/src/other.js", code).code == (
        'console.log("other.js:1:0 ~ a",a) // consoleline-disable-line src/app.js\n'
    )


def test_nested_calls_are_rewritten_independently() -> None:
    result = transform("src/app.js", "console.log(a, console.info(b))\n")

    assert result.code == (
        'console.log("app.js:1:0 ~ a, console.info(b)",a, '
        'console.info("app.js:1:15 ~ b",b))\n'
    )


def test_format_specifier_call_still_rewrites_nested_calls() -> None:
    code = 'console.log("%cstyled", console.info(b))\n'

    result = transform("src/app.js", code)

    assert result.code == 'console.log("%cstyled", console.info("app.js:1:24 ~ b",b))\n'


def test_multiline_arguments_snapshot_is_single_line() -> None:
    code = "console.log(\n  `total`,\n  total\n)\n"

    result = transform("src/app.js", code)

    assert result.code == (
        'console.log(\n  "app.js:1:0 ~ total,  total",`total`,\n  total\n)\n'
    )


def test_non_ascii_source_uses_character_columns() -> None:
    code = 'const s = "é"; console.log(s)\n'

    result = transform("src/app.js", code)

    assert result.code == 'const s = "é"; console.log("app.js:1:15 ~ s",s)\n'


def test_vue_script_block_positions_map_to_document() -> None:
    code = (
        "<template>\n"
        "  <div>{{ msg }}</div>\n"
        "</template>\n"
        "\n"
        "<script>console.log(msg)\n"
        "export default {}\n"
        "</script>\n"
    )

    result = transform("src/App.vue", code)

    assert result.code == code.replace(
        "console.log(msg)", 'console.log("App.vue:5:0 ~ msg",msg)'
    )


def test_vue_script_setup_with_typescript() -> None:
    code = (
        '<script setup lang="ts">\n'
        "const n: number = 1\n"
        "console.log(n)\n"
        "</script>\n"
        "<template><p>{{ n }}</p></template>\n"
    )

    result = transform("src/App.vue?vue&type=script&setup=true&lang.ts", code)

    assert "console.log(\"App.vue:3:0 ~ n\",n)\n" in result.code
    assert result.code.startswith('<script setup lang="ts">\nconst n: number = 1\n')


def test_vue_non_ascii_template_keeps_offsets() -> None:
    code = (
        "<template><p>héllo wörld</p></template>\n"
        "<script>\n"
        "console.log(a)\n"
        "</script>\n"
    )

    result = transform("src/App.vue", code)

    assert result.code == code.replace(
        "console.log(a)", 'console.log("App.vue:3:0 ~ a",a)'
    )


def test_vue_without_script_is_unchanged() -> None:
    code = "<template><div>{{ a }}</div></template>\n<style>p { color: red }</style>\n"

    assert transform("src/App.vue", code).code == code


def test_vue_suppression_reads_document_lines() -> None:
    code = (
        "<template><div></div></template>\n"
        "<script>\n"
        "console.log(a) // consoleline-disable-line\n"
        "console.log(b)\n"
        "</script>\n"
    )

    result = transform("src/App.vue", code)

    assert "console.log(a) // consoleline-disable-line\n" in result.code
    assert 'console.log("App.vue:4:0 ~ b",b)\n' in result.code


def test_extraction_errors_fall_back_to_plain_code() -> None:
    result = transform(
        "src/App.vue",
        "console.log(a)\n",
        extractor_factory=_FailingExtractor,
    )

    assert result.code == 'console.log("App.vue:1:0 ~ a",a)\n'


def test_parse_error_is_fatal() -> None:
    with pytest.raises(ParseError) as excinfo:
        transform("src/broken.js", "const = ;\nconsole.log(a)\n")

    assert excinfo.value.path == "src/broken.js"
    assert excinfo.value.line == 1


def test_invalid_options_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        transform("src/app.js", "console.log(a)\n", {"bogus": True})


def test_options_mapping_is_accepted() -> None:
    result = transform(
        "src/app.js",
        "console.log(a)\n",
        {"show_column": False, "show_args": False},
    )

    assert result.code == 'console.log("app.js:1",a)\n'


def test_highlight_adds_style_argument() -> None:
    options = TransformOptions(highlight=True)

    result = transform("src/app.js", "console.log(a)\n", options)

    assert result.code == (
        f'console.log("%capp.js:1:0 ~ a","{DEFAULT_HIGHLIGHT_STYLE}",a)\n'
    )


def test_suffix_and_type_tag_are_appended() -> None:
    options = TransformOptions(suffix="end", arg_type_tag=True)

    result = transform("src/app.js", "console.log(a)\n", options)

    assert result.code == 'console.log("app.js:1:0 ~ a",a,"end","Identifier")\n'


def test_launch_editor_url_is_relative_to_root() -> None:
    options = TransformOptions(
        show_file=False,
        show_line=False,
        show_args=False,
        launch_editor=True,
        root="/repo",
    )

    result = transform("/repo/src/app.js", "  console.log(a)\n", options)

    assert result.code == (
        '  console.log("http://localhost:3070?path=src/app.js:1:3",a)\n'
    )


def test_custom_logger_object_and_methods() -> None:
    options = TransformOptions(logger_object="logger", methods=["trace"])
    code = "logger.trace(a)\nconsole.log(b)\n"

    result = transform("src/app.js", code, options)

    assert result.code == 'logger.trace("app.js:1:0 ~ a",a)\nconsole.log(b)\n'


def test_source_map_points_injected_text_at_call_site() -> None:
    code = "const a = 1;\n  console.log(a)\n"

    result = transform("src/app.js", code)

    assert result.code == 'const a = 1;\n  console.log("app.js:2:2 ~ a",a)\n'
    injected = result.map.original_position_for(2, 14)
    assert injected is not None
    assert (injected.source, injected.line, injected.column) == ("src/app.js", 2, 2)

    original_arg = result.code.split("\n")[1].index(",a)") + 1
    arg_position = result.map.original_position_for(2, original_arg)
    assert arg_position is not None
    assert (arg_position.line, arg_position.column) == (2, 14)

    untouched = result.map.original_position_for(1, 0)
    assert untouched is not None
    assert (untouched.line, untouched.column) == (1, 0)


def test_include_content_embeds_original_text() -> None:
    code = "console.log(a)\n"

    result = transform("src/app.js", code, {"include_content": True})

    assert result.map.to_dict()["sourcesContent"] == [code]
