"""Topic identifier to renderer lookup."""

from sitecheck.report_engine.models.aggregate import TopicGroup
from sitecheck.report_engine.topics.accessibility import (
    FormsRenderer,
    IframeMetadataRenderer,
    KeyboardRenderer,
    ReducedMotionRenderer,
    StructureRenderer,
    WcagRenderer,
)
from sitecheck.report_engine.topics.base import TopicRenderer
from sitecheck.report_engine.topics.generic import GenericRenderer
from sitecheck.report_engine.topics.infrastructure import (
    AvailabilityRenderer,
    HttpRenderer,
    PerformanceRenderer,
)
from sitecheck.report_engine.topics.interactive import InteractiveRenderer
from sitecheck.report_engine.topics.links import InternalLinksRenderer
from sitecheck.report_engine.topics.responsive import ReflowRenderer
from sitecheck.report_engine.topics.visual import VisualRenderer

GENERIC_RENDERER = GenericRenderer()

RENDERERS: dict[str, TopicRenderer] = {
    renderer.topic: renderer
    for renderer in (
        WcagRenderer(),
        FormsRenderer(),
        KeyboardRenderer(),
        ReducedMotionRenderer(),
        IframeMetadataRenderer(),
        StructureRenderer(),
        InternalLinksRenderer(),
        InteractiveRenderer(),
        AvailabilityRenderer(),
        HttpRenderer(),
        PerformanceRenderer(),
        VisualRenderer(),
        ReflowRenderer(),
    )
}
RENDERERS["responsive"] = RENDERERS["reflow"]


def get_renderer(topic: str | None) -> TopicRenderer:
    """Renderer registered for a topic id, or the generic renderer."""
    if topic is None:
        return GENERIC_RENDERER
    return RENDERERS.get(topic, GENERIC_RENDERER)


def resolve_renderer(group: TopicGroup) -> TopicRenderer:
    """Renderer for a group.

    ``metadata.summaryType`` wins, then the group's ``baseName`` when it is a
    registered topic, then the generic renderer.
    """
    if group.summary_type and group.summary_type in RENDERERS:
        return RENDERERS[group.summary_type]
    return get_renderer(group.base_name)
