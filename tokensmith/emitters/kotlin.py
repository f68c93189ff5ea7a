"""Jetpack Compose color files: Color.kt, Colors.kt or per-category classes."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..conventions.bugs import bug_warning_block
from ..conventions.classify import KOTLIN_COLORS, KotlinReferenceScope, ReferenceSet
from ..conventions.kotlin import BEST_PRACTICE_KOTLIN_CONVENTIONS, KotlinConventions
from ..models import GeneratedArtifact
from ..tokens.colors import figma_to_kotlin_hex
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive, SemanticColor, top_segment_family
from .shared import EmitContext, capitalize, new_token_comment, rename_comment, split_segment, to_camel, to_pascal

_M3_ROLES = (
    ("primary", "fillPrimary"),
    ("onPrimary", "textOnPrimary"),
    ("background", "backgroundDefault"),
    ("surface", "backgroundSurface"),
    ("onSurface", "textPrimary"),
    ("outline", "strokeDefault"),
)

_STATE_IMPORTS = (
    "import androidx.compose.material3.MaterialTheme",
    "import androidx.compose.runtime.Composable",
    "import androidx.compose.runtime.compositionLocalOf",
    "import androidx.compose.runtime.getValue",
    "import androidx.compose.runtime.mutableStateOf",
    "import androidx.compose.runtime.setValue",
    "import androidx.compose.runtime.structuralEqualityPolicy",
)


class KotlinPolicy(EmitterPolicy):
    def __init__(self, conventions: KotlinConventions = BEST_PRACTICE_KOTLIN_CONVENTIONS) -> None:
        self.conventions = conventions

    def primitive_name(self, segments: Sequence[str]) -> str:
        return self._join([part for segment in segments for part in split_segment(segment)])

    def semantic_name(self, token_name: str) -> str:
        return self._join([part for part in token_name.split(self.separator) if part])

    def family(self, segments: Sequence[str]) -> str:
        return top_segment_family(segments)

    def reference(self, primitive: Primitive) -> str:
        if self.conventions.primitive_style == "palette-objects":
            return f"{palette_object(primitive.family)}.color{capitalize(primitive.name)}"
        return f"{self.conventions.primitives_object}.{primitive.name}"

    def dark_reference(self, entry: SemanticColor) -> str:
        return self.reference(entry.light if entry.is_static else entry.dark)

    def _join(self, parts: List[str]) -> str:
        if self.conventions.naming_case == "pascal":
            return to_pascal(parts)
        return to_camel(parts)


class KotlinEmitter:
    """Emits Compose color objects following the detected file architecture."""

    def __init__(self, context: Optional[EmitContext] = None) -> None:
        self.context = context or EmitContext()

    def emit(
        self,
        light: Any,
        dark: Any,
        conventions: KotlinConventions = BEST_PRACTICE_KOTLIN_CONVENTIONS,
        references: Optional[ReferenceSet] = None,
        scope: Optional[KotlinReferenceScope] = None,
        bug_warnings: Sequence[str] = (),
        primitives: Optional[Mapping[str, Any]] = None,
    ) -> List[GeneratedArtifact]:
        policy = KotlinPolicy(conventions)
        model = ColorPipeline(policy).run(light, dark, primitives)
        reference = references.text(KOTLIN_COLORS) if references else None
        scope = scope or KotlinReferenceScope()
        renames = self.context.renames(reference)
        is_new = self.context.new_detector(reference)

        artifacts: List[GeneratedArtifact] = []
        if scope.generate_primitives:
            content = self.render_primitives(model, policy, renames, is_new, bug_warnings)
            artifacts.append(GeneratedArtifact("Color.kt", content, "kotlin", "android"))

        if scope.generate_semantics and model.semantics:
            if conventions.is_multi_file:
                for category, entries in model.categories():
                    filename, content = self.render_category_file(category, entries, policy, is_new)
                    artifacts.append(GeneratedArtifact(filename, content, "kotlin", "android"))
            else:
                content = self.render_semantics(model, policy, is_new)
                artifacts.append(GeneratedArtifact("Colors.kt", content, "kotlin", "android"))

        if not artifacts:
            content = self.render_primitives(model, policy, renames, is_new, bug_warnings)
            artifacts.append(GeneratedArtifact("Color.kt", content, "kotlin", "android"))
        return artifacts

    def render_primitives(
        self,
        model: ColorModel,
        policy: KotlinPolicy,
        renames: Optional[Dict[str, str]] = None,
        is_new: Optional[Callable[[str], bool]] = None,
        bug_warnings: Sequence[str] = (),
    ) -> str:
        conventions = policy.conventions
        renames = renames or {}
        is_new = is_new or (lambda _name: False)

        lines = ["// Color.kt", *self.context.header("//"), ""]
        lines.extend(bug_warning_block(bug_warnings, "//"))
        lines.extend([f"package {conventions.package}", "", "import androidx.compose.ui.graphics.Color", ""])

        if conventions.primitive_style == "palette-objects":
            for family, members in model.families():
                lines.extend(_family_notes(family, renames, ""))
                lines.append(f"object {palette_object(family)} {{")
                for primitive in members:
                    lines.extend(_new_note(f"color{capitalize(primitive.name)}", is_new, "    "))
                    lines.append(f"    val color{capitalize(primitive.name)} = Color({figma_to_kotlin_hex(*primitive.rgba)})")
                lines.extend(["}", ""])
            return "\n".join(lines) + "\n"

        lines.extend(["// Primitive color palette", f"object {conventions.primitives_object} {{"])
        for family, members in model.families():
            lines.extend(_family_notes(family, renames, "    "))
            lines.append(f"    // {capitalize(family)}")
            for primitive in members:
                lines.extend(_new_note(primitive.name, is_new, "    "))
                lines.append(f"    val {primitive.name} = Color({figma_to_kotlin_hex(*primitive.rgba)})")
        lines.extend(["}", ""])
        return "\n".join(lines) + "\n"

    def render_semantics(self, model: ColorModel, policy: KotlinPolicy, is_new: Callable[[str], bool]) -> str:
        conventions = policy.conventions
        light_obj = conventions.light_object
        dark_obj = conventions.dark_object

        lines = ["// Colors.kt", *self.context.header("//"), ""]
        lines.extend(
            [
                f"package {conventions.package}",
                "",
                "import androidx.compose.material3.ColorScheme",
                "import androidx.compose.material3.darkColorScheme",
                "import androidx.compose.material3.lightColorScheme",
                "import androidx.compose.ui.graphics.Color",
                "",
            ]
        )

        for title, obj, pick in (
            ("Light theme semantic tokens", light_obj, lambda e: policy.reference(e.light)),
            ("Dark theme semantic tokens", dark_obj, policy.dark_reference),
        ):
            lines.extend([f"// {title}", f"object {obj} {{"])
            for _category, entries in model.categories():
                for entry in entries:
                    if is_new(entry.name):
                        lines.extend(f"    {line}" for line in new_token_comment("//"))
                    lines.append(f"    val {entry.name} = {pick(entry)}")
            lines.extend(["}", ""])

        lines.append("// Material3 ColorScheme builders — plug into MaterialTheme")
        lines.append("// TODO: map your semantic tokens to Material3 color roles below.")
        for builder, scheme, obj in (("lightColors", "lightColorScheme", light_obj), ("darkColors", "darkColorScheme", dark_obj)):
            lines.append('@Suppress("UnusedReceiverParameter")')
            lines.append(f"fun {builder}(): ColorScheme = {scheme}(")
            for role, token in _M3_ROLES:
                lines.append(f"    // {role:<17} = {obj}.{token},")
            lines.extend([")", ""])
        return "\n".join(lines) + "\n"

    def render_category_file(
        self,
        category: str,
        entries: Sequence[SemanticColor],
        policy: KotlinPolicy,
        is_new: Callable[[str], bool],
    ) -> tuple[str, str]:
        conventions = policy.conventions
        cat = capitalize(category)
        class_name = f"{conventions.class_prefix}{cat}Colors"
        enum_name = f"{conventions.class_prefix}{cat}Color"
        filename = f"{class_name}.kt"

        lines = [f"// {filename}", *self.context.header("//"), "", f"package {conventions.package}", ""]
        if conventions.uses_composition_local or conventions.uses_mutable_state:
            lines.extend(_STATE_IMPORTS)
        lines.extend(["import androidx.compose.ui.graphics.Color", ""])

        if conventions.uses_enum:
            lines.append(f"enum class {enum_name} {{")
            lines.extend(f"    {entry.name.upper()}," for entry in entries)
            lines.extend(["    ;", "    val color: Color", "        @Composable", "        get() = when (this) {"])
            for entry in entries:
                lines.append(f"            {entry.name.upper()} -> MaterialTheme.Local{cat}Colors.{entry.name}")
            lines.extend(["        }", "}", ""])

        if conventions.uses_mutable_state:
            lines.append(f"class {class_name}(")
            lines.extend(f"    {entry.name}: Color," for entry in entries)
            lines.append(") {")
            for entry in entries:
                lines.append(f"    var {entry.name} by mutableStateOf({entry.name}, structuralEqualityPolicy())")
                if conventions.uses_internal_set:
                    lines.append("        internal set")
            lines.append("")
            if conventions.uses_copy_method:
                lines.append("    fun copy(")
                lines.extend(f"        {entry.name}: Color = this.{entry.name}," for entry in entries)
                lines.append(f"    ): {class_name} = {class_name}(")
                lines.extend(f"        {entry.name} = {entry.name}," for entry in entries)
                lines.append("    )")
            else:
                lines.append(f"    fun updateFrom(other: {class_name}) {{")
                lines.extend(f"        {entry.name} = other.{entry.name}" for entry in entries)
                lines.append("    }")
            lines.extend(["}", ""])

        for mode, pick in (("Dark", policy.dark_reference), ("Light", lambda e: policy.reference(e.light))):
            factory = f"{category}{mode}Colors"
            if conventions.uses_parameterized_factories:
                lines.append(f"fun {factory}(")
                lines.extend(f"    {entry.name}: Color," for entry in entries)
                lines.append(f"): {class_name} = {class_name}(")
                lines.extend(f"    {entry.name} = {entry.name}," for entry in entries)
                lines.append(")")
                lines.append(f"val {cat}{mode}ColorScheme = {factory}(")
            else:
                lines.append(f"fun {factory}() = {class_name}(")
            for entry in entries:
                if is_new(entry.name):
                    lines.extend(f"    {line}" for line in new_token_comment("//"))
                lines.append(f"    {entry.name} = {pick(entry)},")
            lines.extend([")", ""])

        if not conventions.uses_parameterized_factories:
            lines.append(f"val {cat}DarkColorScheme = {category}DarkColors()")
            lines.append(f"val {cat}LightColorScheme = {category}LightColors()")
            lines.append("")

        if conventions.uses_composition_local:
            lines.extend(
                [
                    f"val Local{cat}Color = compositionLocalOf {{ {cat}LightColorScheme }}",
                    "",
                    f"val MaterialTheme.Local{cat}Colors",
                    "    @Composable",
                    f"    get() = Local{cat}Color.current",
                    "",
                ]
            )
        return filename, "\n".join(lines) + "\n"


def palette_object(family: str) -> str:
    return to_pascal(family.split("-")) + "Palette"


def _family_notes(family: str, renames: Mapping[str, str], indent: str) -> List[str]:
    old_name = renames.get(family)
    if old_name:
        return [f"{indent}{line}" for line in rename_comment(old_name, capitalize(family), "//")]
    return []


def _new_note(name: str, is_new: Callable[[str], bool], indent: str) -> List[str]:
    return [f"{indent}{line}" for line in new_token_comment("//")] if is_new(name) else []


__all__ = ["KotlinEmitter", "KotlinPolicy"]
