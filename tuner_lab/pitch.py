"""Pitch parsing: note names and frequencies.

A pitch is written either as a positive decimal frequency in Hz
("261.63", "440,5") or as a note name with an optional accidental and an
octave number ("C4", "F#3", "Bb2"). Note names follow MIDI numbering
(C-1 = 0, A4 = 69) against a configurable reference frequency.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from . import config

# Semitone index of each accepted spelling within the octave
NOTE_INDEX: dict[str, int] = {
    "C": 0, "C#": 1, "Db": 1, "D": 2, "D#": 3, "Eb": 3, "E": 4,
    "F": 5, "F#": 6, "Gb": 6, "G": 7, "G#": 8, "Ab": 8, "A": 9,
    "A#": 10, "Bb": 10, "B": 11,
}

# Display names of the 12 pitch classes
PITCH_CLASS_NAMES = [
    "C", "C#/Db", "D", "D#/Eb", "E", "F",
    "F#/Gb", "G", "G#/Ab", "A", "A#/Bb", "B",
]

_NOTE_PATTERN = re.compile(r"^([A-Ga-g])([#b]?)(-?\d+)$")
_FREQUENCY_PATTERN = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


@dataclass(frozen=True)
class ParsedPitch:
    """Result of parsing a pitch string.

    frequency is None when the text is neither a frequency nor a note name.
    midi and pitch_class are only set for note names.
    """
    frequency: Optional[float]
    label: str
    midi: Optional[int] = None
    pitch_class: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.frequency is not None


UNPARSED = ParsedPitch(frequency=None, label="")


def midi_to_frequency(midi_note: float, a4: float = config.DEFAULT_A4) -> float:
    """Convert a (fractional) MIDI note number to frequency in Hz.

    Args:
        midi_note: MIDI note number (can be fractional for microtones)
        a4: Reference frequency of A4 in Hz

    Returns:
        Frequency in Hz
    """
    return a4 * (2.0 ** ((midi_note - config.MIDI_A4) / 12.0))


def frequency_to_midi_float(freq: float, a4: float = config.DEFAULT_A4) -> float:
    """Convert a frequency in Hz to a fractional MIDI note number.

    Args:
        freq: Frequency in Hz
        a4: Reference frequency of A4 in Hz

    Returns:
        Fractional MIDI note number (e.g., 69.5 = A4 + 50 cents)
    """
    if freq <= 0:
        raise ValueError(f"Frequency must be positive, got {freq}")
    return config.MIDI_A4 + 12.0 * math.log2(freq / a4)


def pitch_class_name(pitch_class: int) -> str:
    """Name of a pitch class; any integer is taken modulo 12."""
    return PITCH_CLASS_NAMES[pitch_class % 12]


def _parse_frequency(text: str) -> Optional[float]:
    """Plain decimal Hz value (comma or dot separator), or None."""
    s = text.replace(",", ".", 1)
    if _FREQUENCY_PATTERN.match(s) is None:
        return None
    value = float(s)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_pitch(text: str, a4: float = config.DEFAULT_A4) -> ParsedPitch:
    """Parse a frequency or a note name.

    Never raises: text that matches neither form gives a ParsedPitch whose
    frequency is None.

    Args:
        text: Input such as "C4", "Bb2", "261.63" or "440,5"
        a4: Reference frequency of A4 in Hz

    Returns:
        ParsedPitch with frequency, display label and, for note names,
        the MIDI number and pitch class

    Examples:
        >>> parse_pitch("A4").frequency
        440.0
        >>> parse_pitch("hello").frequency is None
        True
    """
    s = text.strip()
    if not s:
        return UNPARSED

    freq = _parse_frequency(s)
    if freq is not None:
        return ParsedPitch(frequency=freq, label=f"{freq:.6f} Hz")

    m = _NOTE_PATTERN.match(s)
    if m is None:
        return UNPARSED
    letter, accidental, octave_text = m.groups()
    letter = letter.upper()
    index = NOTE_INDEX.get(letter + accidental)
    if index is None:
        return UNPARSED

    octave = int(octave_text)
    midi = (octave + 1) * 12 + index
    return ParsedPitch(
        frequency=midi_to_frequency(midi, a4),
        label=f"{letter}{accidental}{octave}",
        midi=midi,
        pitch_class=midi % 12,
    )


def resolve_frequency(
    text: str,
    a4: float = config.DEFAULT_A4,
    fallback: float = config.DEFAULT_FUNDAMENTAL_HZ,
) -> float:
    """Frequency of a pitch string, or the fallback when it does not parse."""
    parsed = parse_pitch(text, a4)
    return parsed.frequency if parsed.frequency is not None else fallback
