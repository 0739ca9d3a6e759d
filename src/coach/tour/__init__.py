"""Tutorial engine package: step model, flow queue, anchors, projector, placement."""

from .steps import (  # noqa: F401
    Placement,
    Step,
    TourDefinition,
    register_tour,
    get_tour,
    list_tours,
    clear_tours,
    default_tour,
    item_saved_followup,
)
from .anchors import Geometry, AnchorRegistry  # noqa: F401
from .flow import FlowState  # noqa: F401
from .projector import OverlayDescriptor, HIDDEN, project  # noqa: F401
from .placement import (  # noqa: F401
    Viewport,
    BubbleMetrics,
    PlacementResult,
    compute_placement,
)
from .engine import TutorialEngine  # noqa: F401
from .session_flags import LaunchWindow  # noqa: F401
