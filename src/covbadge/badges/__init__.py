"""SVG badge generation."""

from covbadge.badges.factory import Badge, BadgeFactory, render_template
from covbadge.badges.ops import BadgeOps, generate_badges

__all__ = ["Badge", "BadgeFactory", "BadgeOps", "generate_badges", "render_template"]
