"""Render builder-pattern source text from a field list and generation options.

The output is unformatted Java: one statement or brace per line, meant to be
spliced before the enclosing type's closing brace and then handed to a
formatter. Members are emitted in a fixed order:

1. private constructor consuming the builder (unless the builder populates
   the instance itself)
2. static ``with()`` factories
3. getters and 4. setters on the enclosing type
5. the ``Builder`` header, 6. its field declarations
7. no-arg and copy constructors
8. ``build()``
9. fluent mutators, 10. builder getters
11. the closing brace
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

from .fields import FieldDescriptor
from .naming import DefaultNamingPolicy, NamingPolicy
from .options import GenerationOptions


logger = logging.getLogger(__name__)

BUILDER_TYPE_NAME = "Builder"
BUILDER_METHOD_PARAMETER_SUFFIX = "Param"


class BuilderSynthesizer:
    """Accumulates generated lines for one type; use a fresh instance per generation."""

    def __init__(
        self,
        type_name: str,
        fields: Sequence[FieldDescriptor],
        naming: NamingPolicy | None = None,
    ) -> None:
        self.type_name = type_name
        self.fields = tuple(fields)
        self.naming = naming or DefaultNamingPolicy()
        self._buffer = io.StringIO()

    def __str__(self) -> str:
        return self._buffer.getvalue()

    def render(self, options: GenerationOptions) -> str:
        if not options.create_builder_constructor:
            self.class_constructor()
        if options.create_static_with_methods:
            self.static_with_methods(copy_overload=options.create_copy_constructor)
        if options.create_class_getters:
            self.getters()
        if options.create_class_setters:
            self.class_setters()

        self.builder_head()
        self.field_declarations()
        if options.create_copy_constructor:
            self.copy_constructors()
        if options.create_builder_constructor:
            self.populating_build_method()
        else:
            self.delegating_build_method()
        self.builder_methods()
        if options.create_builder_getters:
            self.getters()
        self.builder_tail()
        return str(self)

    def println(self, line: str = "") -> None:
        self._buffer.write(line)
        self._buffer.write("\n")

    def builder_head(self) -> None:
        self.println()
        self.println(f"public static class {BUILDER_TYPE_NAME} {{")

    def builder_tail(self) -> None:
        self.println("}")

    def class_constructor(self) -> None:
        self.println(f"private {self.type_name}(final {BUILDER_TYPE_NAME} builder){{")
        self.field_assignments("this", "builder")
        self.println("}")

    def static_with_methods(self, *, copy_overload: bool) -> None:
        self.println(f"public static {BUILDER_TYPE_NAME} with() {{")
        self.println(f"    return new {BUILDER_TYPE_NAME}();")
        self.println("}")
        if copy_overload:
            self.println(f"public static {BUILDER_TYPE_NAME} with(final {self.type_name} original) {{")
            self.println(f"    return new {BUILDER_TYPE_NAME}(original);")
            self.println("}")

    def getters(self) -> None:
        for field in self.fields:
            self.println(f"public {field.type} {self.naming.getter_name(field)}() {{")
            self.println(f"return {field.name};")
            self.println("}")

    def class_setters(self) -> None:
        for field in self.fields:
            base = self.naming.base_name(field.name)
            self.println(f"public void {self.naming.setter_name(field)}(final {field.type} {base}) {{")
            self.println(f"this.{field.name} = {base};")
            self.println("}")

    def field_declarations(self) -> None:
        for field in self.fields:
            self.println(f"{field.type} {field.name};")

    def copy_constructors(self) -> None:
        self.println(f"public {BUILDER_TYPE_NAME}(){{}}")
        self.println(f"public {BUILDER_TYPE_NAME}(final {self.type_name} original){{")
        self.field_assignments("this", "original")
        self.println("}")

    def delegating_build_method(self) -> None:
        self.println(f"public {self.type_name} build(){{")
        self.println(f"return new {self.type_name}(this);")
        self.println("}")

    def populating_build_method(self) -> None:
        variable = self.instance_variable()
        self.println(f"public {self.type_name} build(){{")
        self.println(f"{self.type_name} {variable} = new {self.type_name}();")
        self.field_assignments(variable, "this")
        self.println(f"return {variable};")
        self.println("}")

    def builder_methods(self) -> None:
        for field in self.fields:
            base = self.naming.base_name(field.name)
            parameter = base + BUILDER_METHOD_PARAMETER_SUFFIX
            self.println(f"public {BUILDER_TYPE_NAME} {base}({field.type} {parameter}) {{")
            self.println(f"this.{field.name} = {parameter};")
            self.println("return this;")
            self.println("}")

    def field_assignments(self, target: str, source: str) -> None:
        for field in self.fields:
            self.println(f"{target}.{field.name} = {source}.{field.name};")

    def instance_variable(self) -> str:
        return self.type_name[:1].lower() + self.type_name[1:]


def synthesize(
    type_name: str,
    fields: Sequence[FieldDescriptor],
    options: Optional[GenerationOptions] = None,
    naming: NamingPolicy | None = None,
) -> str:
    """Return the generated members for ``type_name`` as a single text block."""
    options = options or GenerationOptions()
    text = BuilderSynthesizer(type_name, fields, naming).render(options)
    logger.debug(
        "Synthesized builder for %s: %d field(s), %d line(s)",
        type_name,
        len(fields),
        text.count("\n"),
    )
    return text
