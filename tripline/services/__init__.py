"""Service layer public exports."""

from tripline.services.export_formatter import export_timeline_xml, render_timeline_markdown
from tripline.services.timeline_service import TimelineResult, execute_timeline

__all__ = ["TimelineResult", "execute_timeline", "export_timeline_xml", "render_timeline_markdown"]
