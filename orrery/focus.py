#!/usr/bin/env python3
"""
Focus state machine.

Focus is a single exclusive slot across the scene. Selecting an unfocused body
moves the slot to it (releasing any previous holder); selecting the holder
again empties the slot. These transitions are the only code that writes
`OrbitingBody.focus`.

    Unfocused --select--> Focused     freeze position, camera to body
    Focused   --select--> Unfocused   resume orbit, camera home
"""
import logging
from typing import Optional

from .camera import ViewpointController
from .data_models import FocusState, OrbitingBody
from .orbit import embed

logger = logging.getLogger(__name__)


class FocusController:
    def __init__(self, viewpoint: ViewpointController):
        self.viewpoint = viewpoint
        self.focused: Optional[OrbitingBody] = None

    def select(self, body: OrbitingBody) -> FocusState:
        """Toggle focus on body and return its new state."""
        if body is self.focused:
            self._exit(body)
            self.viewpoint.on_focus_exit()
            return body.focus
        if self.focused is not None:
            # Previous holder resumes orbiting before the new body freezes
            self._exit(self.focused)
        self._enter(body)
        self.viewpoint.on_focus_enter(embed(body.position), body.size)
        return body.focus

    def release(self) -> None:
        """Empty the slot and send the camera home, if anything is focused."""
        if self.focused is None:
            return
        self._exit(self.focused)
        self.viewpoint.on_focus_exit()

    def _enter(self, body: OrbitingBody) -> None:
        body.focus = FocusState.FOCUSED
        self.focused = body
        logger.info("Focus entered: %s", body.name)
        logger.debug("%s frozen at %s", body.name, body.position)

    def _exit(self, body: OrbitingBody) -> None:
        body.focus = FocusState.UNFOCUSED
        if self.focused is body:
            self.focused = None
        logger.info("Focus exited: %s", body.name)
