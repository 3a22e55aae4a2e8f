"""Configuration constants for Tuner Lab."""

# =============================================================================
# Reference Pitch
# =============================================================================

# Concert pitch: frequency of A4 (MIDI 69) used to resolve note names
DEFAULT_A4 = 440.0
MIDI_A4 = 69

# Usual range offered for the reference frequency (baroque to modern)
A4_MIN = 415.0
A4_MAX = 466.0

# Fallback fundamental when a pitch string does not parse (middle C, A4=440)
DEFAULT_FUNDAMENTAL_HZ = 261.625565

# =============================================================================
# Harmonic Series
# =============================================================================

# Number of partials listed when none is requested
DEFAULT_PARTIAL_COUNT = 20

# Playable frequencies sit in the partial's own octave (n·f₀) by default.
# When False, every system is heard inside the base octave [f₀, 2f₀)
DEFAULT_REAL_OCTAVE = True

# =============================================================================
# Comparator
# =============================================================================

# System used to project targets: "just", "equal", "pyth" or "w3"
DEFAULT_SYSTEM = "just"

# Reference for the distance column: "previous" or "first"
DEFAULT_DISTANCE_MODE = "previous"

# Comparator matches the target's octave only on request
DEFAULT_MATCH_OCTAVE = False

# =============================================================================
# Tuning Lattices
# =============================================================================

# Exponent range of 3 searched by the Pythagorean solver (3^-11 .. 3^11)
PYTHAGOREAN_MAX_EXPONENT = 11

# Number of fifths tempered by a quarter comma in Werckmeister III
WERCKMEISTER_TEMPERED_FIFTHS = 4

# Memo caches key on round(cents * CACHE_SCALE): one key per millicent
CACHE_SCALE = 1000

# =============================================================================
# Deviation Grading
# =============================================================================

# |deviation| below PURE_CENTS reads as pure, below MODERATE_CENTS as
# moderate, anything else as wide
PURE_CENTS = 5.0
MODERATE_CENTS = 15.0

# =============================================================================
# OSC Configuration (tone trigger)
# =============================================================================

# Synth listening for /fnote messages (Surge XT default OSC port)
OSC_HOST = "127.0.0.1"
OSC_PORT = 53280

# Note velocity for triggered tones (0.0 to 1.0, scaled to 0-127 on send)
DEFAULT_VELOCITY = 0.8

# =============================================================================
# Playback Timing (seconds)
# =============================================================================

# Duration of a single tone
DEFAULT_DURATION = 0.8

# Duration of each tone in an A/B pair and the pause between them
AB_DURATION = 0.7
AB_GAP = 0.35
