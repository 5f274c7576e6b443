"""Unit tests for the builder regeneration orchestrator."""

import pytest

from buildergen.errors import LocationError, MalformedEditError, ModelAccessError
from buildergen.fields import FieldDescriptor
from buildergen.generator import BuilderGenerator, splice_unit
from buildergen.host import Span
from buildergen.options import GenerationOptions
from buildergen.synthesizer import synthesize


POINT_SOURCE = "public class Point {\n    int x;\n    int y;\n}\n"
POINT_FIELDS = (FieldDescriptor("x", "int"), FieldDescriptor("y", "int"))


class FakeModel:
    def __init__(self, contents=POINT_SOURCE, spans=(), offset=None, fields=POINT_FIELDS, fail_fields=False):
        self.contents = contents
        self.spans = list(spans)
        self.offset = contents.rfind("}") if offset is None else offset
        self.fields = fields
        self.fail_fields = fail_fields
        self.writes: list[str] = []

    def get_enclosing_type_name(self) -> str:
        return "Point"

    def get_fields(self):
        if self.fail_fields:
            raise ModelAccessError("type Point cannot be resolved")
        return self.fields

    def get_contents(self) -> str:
        return self.contents

    def set_contents(self, text: str) -> None:
        self.writes.append(text)
        self.contents = text

    def insertion_offset(self) -> int:
        return self.offset

    def generated_spans(self):
        return self.spans


class FakeFormatter:
    def __init__(self, result="FORMATTED"):
        self.result = result
        self.calls: list[str] = []

    def format(self, source: str):
        self.calls.append(source)
        return self.result


def test_generate_inserts_before_closing_brace() -> None:
    model = FakeModel()
    outcome = BuilderGenerator(GenerationOptions(format_source=False)).generate(model)

    expected_text = synthesize("Point", POINT_FIELDS)
    pos = POINT_SOURCE.rfind("}")
    assert outcome.ok
    assert outcome.generated == expected_text
    assert model.writes == [POINT_SOURCE[:pos] + expected_text + POINT_SOURCE[pos:]]


def test_generate_replaces_previous_builder_in_single_write() -> None:
    model = FakeModel()
    BuilderGenerator(GenerationOptions(format_source=False)).generate(model)
    first = model.contents

    generated = synthesize("Point", POINT_FIELDS)
    start = first.index(generated)
    rerun = FakeModel(contents=first, spans=[Span(start, start + len(generated))], offset=first.rfind("}"))
    outcome = BuilderGenerator(GenerationOptions(format_source=False)).generate(rerun)

    assert outcome.ok
    assert rerun.writes == [first]


def test_formatter_output_replaces_contents() -> None:
    model = FakeModel()
    formatter = FakeFormatter()
    outcome = BuilderGenerator(GenerationOptions(), formatter=formatter).generate(model)

    assert outcome.ok and outcome.formatted
    assert len(formatter.calls) == 1
    assert "public static class Builder {" in formatter.calls[0]
    assert model.writes == ["FORMATTED"]


def test_failed_format_keeps_unformatted_splice() -> None:
    model = FakeModel()
    outcome = BuilderGenerator(GenerationOptions(), formatter=FakeFormatter(result=None)).generate(model)

    assert outcome.ok
    assert not outcome.formatted
    assert model.writes == [outcome.contents]
    assert "public static class Builder {" in model.contents


def test_format_source_disabled_skips_formatter() -> None:
    formatter = FakeFormatter()
    BuilderGenerator(GenerationOptions(format_source=False), formatter=formatter).generate(FakeModel())

    assert formatter.calls == []


@pytest.mark.parametrize(
    ("model", "error_type"),
    [
        (FakeModel(fail_fields=True), ModelAccessError),
        (FakeModel(spans=[Span(5, 500)]), MalformedEditError),
        (FakeModel(spans=[Span(2, 10), Span(8, 12)]), MalformedEditError),
        (FakeModel(offset=-1), LocationError),
        (FakeModel(spans=[Span(20, 40)], offset=30), LocationError),
    ],
)
def test_failures_abort_without_touching_buffer(model, error_type, caplog) -> None:
    formatter = FakeFormatter()
    outcome = BuilderGenerator(formatter=formatter).generate(model)

    assert not outcome.ok
    assert isinstance(outcome.error, error_type)
    assert model.writes == []
    assert formatter.calls == []
    assert "Builder generation aborted" in caplog.text


def test_splice_unit_shifts_offset_past_removed_spans() -> None:
    contents = "0123456789"

    assert splice_unit(contents, [Span(2, 4)], 8, "X") == "014567X89"
    assert splice_unit(contents, [Span(6, 8)], 3, "X") == "012X34589"
    assert splice_unit(contents, [Span(6, 8), Span(1, 2)], 9, "X") == "023458X9"


def test_splice_unit_accepts_offset_on_span_boundary() -> None:
    assert splice_unit("abcdef", [Span(2, 4)], 4, "X") == "abXef"
    assert splice_unit("abcdef", [Span(2, 4)], 2, "X") == "abXef"


@pytest.mark.parametrize("blank", ["", "  \n"])
def test_blank_format_result_keeps_unformatted_splice(blank) -> None:
    model = FakeModel()
    outcome = BuilderGenerator(GenerationOptions(), formatter=FakeFormatter(result=blank)).generate(model)

    assert outcome.ok
    assert not outcome.formatted
    assert model.contents.startswith("public class Point {\n    int x;\n    int y;\n")
    assert "public static class Builder {" in model.contents
