"""Style mapping from presentation roles to style declarations."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Handoff Notes"

_MONO = 'Menlo, Monaco, Consolas, "SF Mono", monospace'
_SANS = '-apple-system, BlinkMacSystemFont, "SF Pro Text", system-ui, sans-serif'
_HEADING = {"fontWeight": 600, "margin": "10px 0 4px"}

DEFAULT_STYLES: dict[str, dict[str, Any]] = {
    "container": {
        "borderRadius": "12px",
        "border": "1px solid rgba(148, 163, 184, 0.5)",
        "padding": "16px 18px",
        "background": "linear-gradient(145deg, #0f172a 0%, #020617 60%)",
        "color": "#e5e7eb",
        "fontFamily": _SANS,
        "fontSize": "14px",
        "lineHeight": 1.5,
    },
    "label": {
        "fontSize": "11px",
        "letterSpacing": "0.08em",
        "textTransform": "uppercase",
        "color": "#9ca3af",
        "marginBottom": "6px",
    },
    "heading-1": {**_HEADING, "fontSize": "18px"},
    "heading-2": {**_HEADING, "fontSize": "16px"},
    "heading-3": {**_HEADING, "fontSize": "14px"},
    "paragraph": {"margin": "4px 0", "color": "#e5e7eb"},
    "list-unordered": {"margin": "4px 0 4px 18px", "padding": 0},
    "list-ordered": {"margin": "4px 0 4px 18px", "padding": 0},
    "list-item": {"margin": "2px 0"},
    "divider": {
        "border": "none",
        "borderTop": "1px solid rgba(51, 65, 85, 0.9)",
        "margin": "8px 0",
    },
    "spacer": {"height": "6px"},
    "strong": {"fontWeight": 600},
    "emphasis": {"fontStyle": "italic"},
    "code": {
        "fontFamily": _MONO,
        "fontSize": "12px",
        "padding": "1px 4px",
        "borderRadius": "4px",
        "backgroundColor": "rgba(15, 23, 42, 0.9)",
        "border": "1px solid rgba(51, 65, 85, 0.9)",
    },
    "text": {},
}

ROLES = frozenset(DEFAULT_STYLES)


@dataclass
class Theme:
    """Label text plus one style mapping per presentation role."""

    label: str = DEFAULT_LABEL
    styles: dict[str, dict[str, Any]] = field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_STYLES.items()}
    )

    def style_for(self, role: str) -> dict[str, Any]:
        # Copy so callers can never reach back into the theme
        return dict(self.styles.get(role, {}))

    @classmethod
    def from_overrides(
        cls,
        label: str | None = None,
        overrides: dict[str, dict[str, Any]] | None = None,
    ) -> "Theme":
        """
        Build a theme from the defaults with per-role declarations merged on top.

        Unknown roles are skipped with a warning rather than rejected.
        """
        theme = cls(label=label if label is not None else DEFAULT_LABEL)
        for role, decls in (overrides or {}).items():
            if role not in ROLES:
                logger.warning("Ignoring style override for unknown role %r", role)
                continue
            if not isinstance(decls, dict):
                logger.warning("Ignoring non-table style override for role %r", role)
                continue
            theme.styles[role].update(decls)
        return theme
