"""
Render boundary around every leaf screen.

If a leaf widget fails while being built (its constructor or, for a
RouteView, its compose_view), the failure is logged and a fallback is
shown in its place. Router state is never touched, so back
navigation and tab switching keep working.
"""

import logging
from typing import Any, Callable, Mapping

from textual.app import ComposeResult
from textual.compose import compose as compose_children
from textual.containers import Container
from textual.widget import Widget
from textual.widgets import Static

from ..i18n import t
from .views import RouteView

logger = logging.getLogger(__name__)


class ErrorFallback(Static):
    """Shown instead of a screen that failed to render"""

    DEFAULT_CSS = """
    ErrorFallback {
        width: 100%;
        height: 100%;
        content-align: center middle;
        text-align: center;
        color: $error;
    }
    """

    def __init__(self, route_name: str, **kwargs):
        super().__init__(**kwargs)
        self.route_name = route_name

    def render(self) -> str:
        return f"{t('common.error')}\n\n[dim]{t('common.back')}[/]"


class ScreenBoundary(Container):
    """Hosts one leaf screen for one route"""

    DEFAULT_CSS = """
    ScreenBoundary {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(
        self,
        route_name: str,
        factory: Callable[[Mapping[str, Any]], Widget],
        params: Mapping[str, Any],
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.route_name = route_name
        self.factory = factory
        self.params = params
        self.failed = False

    def compose(self) -> ComposeResult:
        try:
            widget = self._render_leaf()
        except Exception:
            logger.exception("Screen %s failed to render", self.route_name)
            self.failed = True
            widget = ErrorFallback(self.route_name)
        yield widget

    def _render_leaf(self) -> Widget:
        widget = self.factory(self.params)
        if isinstance(widget, RouteView):
            # Build the leaf's children here so a failure lands in this boundary
            for child in compose_children(widget, widget.compose_view()):
                widget.compose_add_child(child)
        return widget
