"""All magic numbers and configuration constants."""

DEFAULT_API_URL = "http://127.0.0.1:9933"   # local TTS/clone backend
DEFAULT_API_VERSION = "v2"                   # backend model version ("v1" or "v2")
API_VERSIONS = ("v1", "v2")
DEFAULT_VOICE = "female1"                    # built-in voice used when none is given
DEFAULT_SPEED = 1.0                          # speech speed multiplier
DEFAULT_SEGMENT_SIZE = 200                   # chars, max batch segment length
MAX_TEXT_LENGTH = 1500                       # chars, single-shot synthesis limit
SEGMENT_DELAY_SECONDS = 0.5                  # throttle between batch segment requests
HEALTH_TIMEOUT_SECONDS = 5                   # /health probe timeout
SYNTHESIS_TIMEOUT_SECONDS = None             # no client timeout: model loading can take minutes
SENTENCE_TERMINATORS = "。！？.!?"
AUDIO_EXTENSIONS = (".wav", ".mp3", ".m4a", ".flac")
CUSTOM_VOICE_PREFIX = "custom:"
CONFIG_PATH = "config.json"
OUTPUT_DIR = "data/txt_to_audio"             # default save location
TMP_DIR = "tmp"                              # batch scratch files
VOICES_DIR = "voices"                        # custom voice samples: name-referenceText.ext
VERSION = "0.1.0"
