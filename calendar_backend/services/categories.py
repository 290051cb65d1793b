"""Event categories, their display colors, and the goal-color to category mapping."""

from calendar_backend.models.event import EVENT_CATEGORIES

CATEGORY_COLORS = {
    "exercise": {"background": "#4CAF50", "border": "#2E7D32", "text": "white", "title": "Exercise"},
    "eating":   {"background": "#FF9800", "border": "#EF6C00", "text": "white", "title": "Eating"},
    "work":     {"background": "#2196F3", "border": "#1565C0", "text": "white", "title": "Work"},
    "relax":    {"background": "#9C27B0", "border": "#6A1B9A", "text": "white", "title": "Relax"},
    "family":   {"background": "#F44336", "border": "#C62828", "text": "white", "title": "Family"},
    "social":   {"background": "#00BCD4", "border": "#00838F", "text": "white", "title": "Social"},
}

DEFAULT_CATEGORY = "work"

# Goal palette offered by the goal form
GOAL_COLOR_CATEGORIES = {
    "#3B82F6": "work",      # blue
    "#10B981": "exercise",  # green
    "#EF4444": "family",    # red
    "#F59E0B": "eating",    # amber
    "#8B5CF6": "relax",     # purple
    "#EC4899": "social",    # pink
    "#6B7280": "work",      # gray
    "#000000": "work",      # black
}


def category_for_goal_color(color: str | None) -> str:
    if not color:
        return DEFAULT_CATEGORY
    return GOAL_COLOR_CATEGORIES.get(color.strip().upper(), DEFAULT_CATEGORY)


def category_style(category: str) -> dict:
    colors = CATEGORY_COLORS.get(category, CATEGORY_COLORS[DEFAULT_CATEGORY])
    return {
        "backgroundColor": colors["background"],
        "borderColor": colors["border"],
        "color": colors["text"],
    }


def category_title(category: str) -> str:
    colors = CATEGORY_COLORS.get(category)
    return colors["title"] if colors else category


def event_categories() -> list[dict]:
    """Categories in form order, with the label and colors the calendar renders them with."""
    return [
        {"value": key, "label": category_title(key), "style": category_style(key)}
        for key in EVENT_CATEGORIES
    ]
