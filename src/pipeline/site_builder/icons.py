"""Inline SVG icons available to templates through the ``svg_icon`` filter."""

from __future__ import annotations

_SVG_OPEN = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" width="28" '
    'height="28" fill="none" stroke="currentColor" stroke-width="1.5" '
    'stroke-linecap="round" stroke-linejoin="round" aria-hidden="true">'
)

ICON_MAP: dict[str, str] = {
    "handshake": _SVG_OPEN
    + '<path d="M11 17l2 2a1 1 0 0 0 1.4 0l4.6-4.6a1 1 0 0 0 0-1.4L14 8"/>'
    + '<path d="M3 12l5-5 4 4"/><path d="M14 8l-3-3-4 4"/><path d="M3 12l4 4"/></svg>',
    "chart": _SVG_OPEN
    + '<path d="M3 3v18h18"/><path d="M7 15l4-4 3 3 5-6"/></svg>',
    "compass": _SVG_OPEN
    + '<circle cx="12" cy="12" r="9"/><path d="M15.5 8.5l-2 5-5 2 2-5z"/></svg>',
    "users": _SVG_OPEN
    + '<circle cx="9" cy="8" r="3.5"/><path d="M2.5 20a6.5 6.5 0 0 1 13 0"/>'
    + '<path d="M16 4.5a3.5 3.5 0 0 1 0 7"/><path d="M18 14a6.5 6.5 0 0 1 3.5 6"/></svg>',
    "shield": _SVG_OPEN
    + '<path d="M12 3l8 3v6c0 4.5-3.4 8.3-8 9-4.6-.7-8-4.5-8-9V6z"/></svg>',
    "clock": _SVG_OPEN
    + '<circle cx="12" cy="12" r="9"/><path d="M12 7v5l3 3"/></svg>',
    "linkedin": _SVG_OPEN
    + '<rect x="3" y="3" width="18" height="18" rx="2"/><path d="M8 10v7"/>'
    + '<path d="M8 7v.01"/><path d="M12 17v-4a2 2 0 0 1 4 0v4"/><path d="M12 10v7"/></svg>',
    "external": _SVG_OPEN
    + '<path d="M14 4h6v6"/><path d="M20 4l-9 9"/>'
    + '<path d="M18 14v5a1 1 0 0 1-1 1H5a1 1 0 0 1-1-1V7a1 1 0 0 1 1-1h5"/></svg>',
}
