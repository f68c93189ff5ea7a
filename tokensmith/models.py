"""Core data models shared across tokensmith components."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

ALIAS_EXTENSION = "com.figma.aliasData"

TokenDocument = Dict[str, Any]
TokenPath = Tuple[str, ...]


def alias_target_of(node: Mapping[str, Any]) -> Optional[str]:
    """Return the Figma alias target variable name carried by a raw token node."""
    extensions = node.get("$extensions")
    if not isinstance(extensions, Mapping):
        return None
    alias = extensions.get(ALIAS_EXTENSION)
    if not isinstance(alias, Mapping):
        return None
    target = alias.get("targetVariableName")
    return target if isinstance(target, str) and target else None


@dataclass(frozen=True)
class Token:
    """A leaf of a token document."""

    kind: str
    value: Any
    alias_target: Optional[str] = None
    extensions: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> "Token":
        extensions = node.get("$extensions")
        return cls(
            kind=str(node.get("$type")),
            value=node.get("$value"),
            alias_target=alias_target_of(node),
            extensions=dict(extensions) if isinstance(extensions, Mapping) else {},
        )


@dataclass(frozen=True)
class TokenGraphNode:
    """One concrete token path in the graph arena."""

    path: TokenPath
    kind: str
    raw_value: Any
    alias_target: Optional[TokenPath] = None

    @property
    def key(self) -> str:
        return "/".join(self.path)


@dataclass(frozen=True)
class TokenGraph:
    """Arena of nodes keyed by canonical name plus a separate alias edge map."""

    nodes: Mapping[str, TokenGraphNode]
    edges: Mapping[str, str]


@dataclass(frozen=True)
class CycleReport:
    """Result of alias cycle detection."""

    has_cycles: bool
    cycles: Sequence[Sequence[str]]


@dataclass(frozen=True)
class GeneratedArtifact:
    """A single generated source file."""

    filename: str
    content: str
    format: str
    platform: str
    reference_content: Optional[str] = None

    def with_content(self, content: str) -> "GeneratedArtifact":
        return replace(self, content=content)

    def with_reference(self, reference: Optional[str]) -> "GeneratedArtifact":
        return replace(self, reference_content=reference)


@dataclass(frozen=True)
class ModifiedToken:
    """A token present in both texts with a different value."""

    name: str
    old_value: str
    new_value: str


@dataclass(frozen=True)
class RenamedToken:
    """A removed token paired with an added token carrying the same value."""

    old_name: str
    new_name: str
    value: str


@dataclass(frozen=True)
class FamilyRename:
    """A consistent prefix substitution shared by several renamed tokens."""

    old_family: str
    new_family: str
    members: Sequence[RenamedToken]


@dataclass(frozen=True)
class DiffRecord:
    """Machine-readable comparison of a reference file and its regeneration."""

    filename: str
    added_lines: int
    removed_lines: int
    added_tokens: Sequence[str] = ()
    removed_tokens: Sequence[str] = ()
    modified_tokens: Sequence[ModifiedToken] = ()
    renamed_tokens: Sequence[RenamedToken] = ()
    family_renames: Sequence[FamilyRename] = ()

    @property
    def modified_token_names(self) -> frozenset:
        return frozenset(token.name for token in self.modified_tokens)

    @property
    def has_changes(self) -> bool:
        return bool(self.added_lines or self.removed_lines)


@dataclass(frozen=True)
class DependencyEdge:
    """A semantic token referencing a primitive or another semantic token."""

    from_token: str
    to_token: str


@dataclass(frozen=True)
class ImpactEntry:
    """Semantic tokens affected by a change to one primitive."""

    primitive_name: str
    change_type: str
    affected_semantics: Sequence[str]


@dataclass(frozen=True)
class GenerationWarning:
    """Structured, non-fatal problem surfaced alongside generated files."""

    type: str
    message: str
    details: Sequence[str] = ()


@dataclass
class GenerationStats:
    """Counts per token kind for one generation run."""

    primitive_colors: int = 0
    semantic_colors: int = 0
    spacing_steps: int = 0
    typography_styles: int = 0
    shadow_tokens: int = 0
    border_tokens: int = 0
    opacity_tokens: int = 0
    motion_tokens: int = 0
    radius_tokens: int = 0


@dataclass
class GenerationResult:
    """Everything produced by a generation run."""

    artifacts: List[GeneratedArtifact]
    stats: GenerationStats
    warnings: List[GenerationWarning] = field(default_factory=list)
    diffs: List[DiffRecord] = field(default_factory=list)
    impact: List[ImpactEntry] = field(default_factory=list)
