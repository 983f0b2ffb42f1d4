"""Compact default styling for the NiceGUI elements in the chart dialog."""

from __future__ import annotations

from nicegui import ui

from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

# tailwind text class -> quasar size prop
_QUASAR_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = 'text-base'):
    """Make dialog widgets dense and use one text size.

    Args:
        text_size: One of the keys of _QUASAR_SIZES.
    """
    quasar_size = _QUASAR_SIZES[text_size]
    logger.debug(f"gui defaults: text_size={text_size} quasar={quasar_size}")

    ui.label.default_classes(f"{text_size} select-text")
    for element in (ui.label, ui.button, ui.select, ui.input, ui.radio, ui.expansion):
        element.default_props("dense")
    for element in (ui.button, ui.select, ui.input, ui.radio, ui.expansion):
        element.default_classes(text_size)
    ui.checkbox.default_classes(text_size)
    ui.checkbox.default_props(f"dense size={quasar_size}")
