CUSTOM_THEME = {
    "template": "plotly_dark",
    "color_sequence": [
        "#dc2626",  # brand red
        "#f59e0b",  # amber
        "#10b981",  # emerald
        "#8b5cf6",  # violet
        "#3b82f6",  # blue
        "#ec4899",  # pink
        "#6366f1",  # indigo
        "#f97316",  # orange
        "#14b8a6",  # teal
        "#eab308",  # yellow
    ],
    "font_family": "Roboto, sans-serif",
    "font_color": "#f5f6fa",
    "axis_color": "#f5f6fa"
}

GENRE_TAG_STYLE = "background:#dc2626; color:white; padding:4px 8px; border-radius:8px; font-size:0.8em; margin-right:5px;"


def genre_tags(genres):
    return " ".join(f"<span style='{GENRE_TAG_STYLE}'>{g}</span>" for g in genres or [])
