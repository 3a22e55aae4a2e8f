"""OSC tone trigger for auditioning intervals.

Asks an external synthesizer (e.g. Surge XT) to sound exact frequencies,
one tone at a time or as an A/B pair. Nothing is synthesized here.

Addresses understood by Surge XT 1.3 and later (arguments are floats):
    /fnote        frequency, velocity, note id   start a tone
    /fnote/rel    frequency, velocity, note id   release it
    /allnotesoff                                 silence everything
"""

import time
from typing import Callable, Optional

from pythonosc import udp_client

from . import config


class OscSender:
    """Sends frequency notes to a synthesizer over OSC.

    Playback helpers block for the duration of the tones; pass a custom
    sleep function to drive them without waiting.
    """

    def __init__(
        self,
        host: str = config.OSC_HOST,
        port: int = config.OSC_PORT,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """Initialize the OSC sender.

        Args:
            host: Target host address
            port: Target UDP port of the synthesizer
            sleep: Function used to wait between note on and note off
                (time.sleep if omitted)
        """
        self.host = host
        self.port = port
        self._sleep = sleep if sleep is not None else time.sleep
        self._client: Optional[udp_client.SimpleUDPClient] = None
        self._next_note_id = 1

    def open(self) -> None:
        """Create the UDP client."""
        self._client = udp_client.SimpleUDPClient(self.host, self.port)

    def close(self) -> None:
        """Drop the UDP client; later messages are ignored."""
        self._client = None

    def _send(self, address: str, args: list) -> None:
        if self._client is None:
            return
        self._client.send_message(address, args)

    def send_note_on(self, note_id: int, frequency: float, velocity: float) -> None:
        """Send a note-on at an exact frequency.

        Args:
            note_id: Identifier used to release the note later
            frequency: Frequency in Hz
            velocity: 0.0 to 1.0 (scaled to 0-127), or already 0-127
        """
        vel_scaled = velocity * 127.0 if velocity <= 1.0 else velocity
        self._send("/fnote", [float(frequency), float(vel_scaled), float(note_id)])

    def send_note_off(self, note_id: int, frequency: float = 0.0) -> None:
        """Release a note; the frequency is ignored when note_id is known."""
        self._send("/fnote/rel", [float(frequency), 0.0, float(note_id)])

    def send_all_notes_off(self) -> None:
        """Release all sounding notes."""
        self._send("/allnotesoff", [])

    def play_one(
        self,
        frequency: float,
        duration: float = config.DEFAULT_DURATION,
        velocity: float = config.DEFAULT_VELOCITY,
    ) -> None:
        """Sound one frequency for a fixed duration (blocking).

        Args:
            frequency: Frequency in Hz
            duration: Seconds between note on and note off
            velocity: Note velocity (0.0 to 1.0)
        """
        note_id = self._next_note_id
        self._next_note_id += 1
        self.send_note_on(note_id, frequency, velocity)
        self._sleep(max(0.0, duration))
        self.send_note_off(note_id, frequency)

    def play_ab(
        self,
        frequency_a: float,
        frequency_b: float,
        duration: float = config.AB_DURATION,
        gap: float = config.AB_GAP,
        velocity: float = config.DEFAULT_VELOCITY,
    ) -> None:
        """Sound two frequencies one after the other, separated by a gap."""
        self.play_one(frequency_a, duration, velocity)
        self._sleep(max(0.0, gap))
        self.play_one(frequency_b, duration, velocity)

    @property
    def is_open(self) -> bool:
        """True between open() and close()."""
        return self._client is not None

    def __enter__(self) -> "OscSender":
        """Open and return the sender."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Release all notes, then close."""
        self.send_all_notes_off()
        self.close()


class MockOscSender(OscSender):
    """Mock OSC sender for use without a synthesizer.

    Records every message and prints it instead of sending via OSC.
    """

    def __init__(self, *args, **kwargs):
        """Initialize without opening a socket."""
        self.verbose = kwargs.pop("verbose", True)
        super().__init__(*args, **kwargs)
        self._open = False
        self._message_log: list[dict] = []

    def open(self) -> None:
        """Start logging messages."""
        self._open = True
        if self.verbose:
            print(f"[MockOSC] Ready for {self.host}:{self.port}")

    def close(self) -> None:
        """Stop logging messages."""
        self._open = False
        if self.verbose:
            print("[MockOSC] Closed")

    def _send(self, address: str, args: list) -> None:
        if not self._open:
            return
        self._message_log.append({"address": address, "args": list(args)})
        if self.verbose:
            print(f"[MockOSC] {address} {' '.join(f'{a:.2f}' for a in args)}".rstrip())

    @property
    def is_open(self) -> bool:
        return self._open

    def get_log(self) -> list[dict]:
        """Copy of every message sent while open."""
        return self._message_log.copy()

    def clear_log(self) -> None:
        """Forget logged messages."""
        self._message_log.clear()
