"""Widget ID constants for the field and its dialogs.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from date_time_picker.ui.ids import css, CONFIRM_BTN
        self.query_one(css(CONFIRM_BTN), Button)
    """
    return f"#{widget_id}"


def day_id(value) -> str:
    """ID of the day button for a date (e.g. "day-2020-07-25")."""
    return f"day-{value.isoformat()}"


def year_id(year: int) -> str:
    """ID of the year button for a year (e.g. "year-2020")."""
    return f"year-{year}"


# Shared modal IDs
MODAL_TITLE = "modal-title"
MODAL_BUTTONS = "modal-buttons"
MODAL_ERROR = "modal-error"
CANCEL_BTN = "cancel-btn"
CONFIRM_BTN = "confirm-btn"

# Date picker IDs
DATE_PICKER_MODAL = "date-picker-modal"
SELECTED_DATE = "selected-date"
MONTH_NAV = "month-nav"
MONTH_LABEL = "month-label"
PREV_MONTH_BTN = "prev-month-btn"
NEXT_MONTH_BTN = "next-month-btn"
DAY_GRID = "day-grid"
DATE_INPUT = "date-input"
DATE_INPUT_LABEL = "date-input-label"
YEAR_VIEW_BTN = "year-view-btn"
YEAR_GRID = "year-grid"

# Time picker IDs
TIME_PICKER_MODAL = "time-picker-modal"
TIME_ROW = "time-row"
HOUR_LABEL = "hour-label"
MINUTE_LABEL = "minute-label"
HOUR_UP_BTN = "hour-up-btn"
HOUR_DOWN_BTN = "hour-down-btn"
MINUTE_UP_BTN = "minute-up-btn"
MINUTE_DOWN_BTN = "minute-down-btn"
HOUR_INPUT = "hour-input"
MINUTE_INPUT = "minute-input"
PERIOD_BTN = "period-btn"

# Demo app IDs
DEMO_FIELDS = "demo-fields"
DEMO_VALUES = "demo-values"
STATUS_BAR = "status-bar"
SUBMIT_BTN = "submit-btn"
RESET_BTN = "reset-btn"
