"""Theme system — colors per status tag and stylesheet generation."""

DEFAULT_THEME = "Stage Dark"

# Every theme maps the window colors plus one text color per status tag.
THEMES = {
    "Stage Dark": {
        "bg": "#101014",
        "text": "#f2f2f2",
        "status_text": "#8a8a96",
        "pretalk": "#7fb2ff",
        "no-change-needed": "#7ddc7d",
        "small-change-needed": "#f0c24b",
        "big-change-needed": "#ff5c5c",
    },
    "Cupertino Light": {
        "bg": "#ffffff",
        "text": "#1c1c1e",
        "status_text": "#6e6e73",
        "pretalk": "#0a64d6",
        "no-change-needed": "#248a3d",
        "small-change-needed": "#b25000",
        "big-change-needed": "#d70015",
    },
}


# Dynamic Qt property a tag is exposed under. Property selectors can't hold dashes.
def tag_property(tag):
    return tag.replace("-", "_")


def build_stylesheet(theme):
    t = THEMES.get(theme, THEMES[DEFAULT_THEME])
    rules = [
        f"QMainWindow, QWidget {{ background-color: {t['bg']}; color: {t['text']}; }}",
        f"#statusLabel {{ color: {t['status_text']}; }}",
        f"#timerLabel {{ color: {t['text']}; }}",
    ]
    for tag in ("pretalk", "no-change-needed", "small-change-needed", "big-change-needed"):
        rules.append(f'#timerLabel[{tag_property(tag)}="true"] {{ color: {t[tag]}; }}')
    return "\n".join(rules)


__all__ = ["DEFAULT_THEME", "THEMES", "build_stylesheet", "tag_property"]
