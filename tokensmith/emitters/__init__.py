"""Code emitters for web, iOS and Android targets."""

from __future__ import annotations

from .border import BorderEmitter
from .composite import CompositeEmitter
from .css import CssEmitter
from .kotlin import KotlinEmitter
from .motion import MotionEmitter
from .opacity import OpacityEmitter
from .pipeline import ColorModel, ColorPipeline, EmitterPolicy, Primitive, SemanticColor
from .radius import RadiusEmitter
from .scss import ScssEmitter
from .shadow import ShadowEmitter
from .shared import EmitContext, collect_spacing_entries
from .spacing import SpacingEmitter
from .swift import SwiftEmitter
from .typescript import TypeScriptEmitter
from .typography import TypographyEmitter, TypographyOutput

__all__ = [
    "BorderEmitter",
    "ColorModel",
    "ColorPipeline",
    "CompositeEmitter",
    "CssEmitter",
    "EmitContext",
    "EmitterPolicy",
    "KotlinEmitter",
    "MotionEmitter",
    "OpacityEmitter",
    "Primitive",
    "RadiusEmitter",
    "ScssEmitter",
    "SemanticColor",
    "ShadowEmitter",
    "SpacingEmitter",
    "SwiftEmitter",
    "TypeScriptEmitter",
    "TypographyEmitter",
    "TypographyOutput",
    "collect_spacing_entries",
]
