import signal
import logging

log = logging.getLogger(__name__)


class CtrlCHandler:
    """
    Handle Ctrl+C so the demo stops the sensors and the tick
    before exiting instead of dying mid-tick.
    """
    def __init__(self):
        self.should_stop = False
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C is detected"""
        log.info("Interrupt signal detected, stopping cleanly...")
        self.should_stop = True
