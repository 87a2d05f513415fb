"""PickerProvider that shows the modal dialogs on a Textual app."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from date_time_picker.controller.session import DatePickRequest, TimePickRequest
from date_time_picker.ui.modals import DatePickerModal, TimePickerModal

if TYPE_CHECKING:
    from textual.app import App


class TextualPickers:
    """Pushes DatePickerModal / TimePickerModal and waits for their result.

    Textual only lets a worker wait on a screen, so the field's tap must run
    in one (DateTimeField.open_pickers does).
    """

    def __init__(self, app: App) -> None:
        self.app = app

    async def pick_date(self, request: DatePickRequest) -> dt.date | None:
        return await self.app.push_screen_wait(DatePickerModal(request))

    async def pick_time(self, request: TimePickRequest) -> dt.time | None:
        return await self.app.push_screen_wait(TimePickerModal(request))
