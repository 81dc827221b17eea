"""Constants used throughout the application."""

# OpenRouter endpoint (OpenAI-compatible)
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Default model
DEFAULT_MODEL = "google/gemini-2.0-flash-001"

# Environment variable names
ENV_OPENROUTER_API_KEY = "OPENROUTER_API_KEY"
ENV_OPENROUTER_MODEL = "OPENROUTER_MODEL"

# Default values
DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_CONCURRENCY = 3
DEFAULT_CASE = "snake"

# Case formats
CASE_SNAKE = "snake"
CASE_KEBAB = "kebab"
CASE_PASCAL = "pascal"
CASE_CAMEL = "camel"
CASE_CAPITAL = "capital"
CASE_LOWERCASE = "lowercase"
CASE_SENTENCE = "sentence"

# value -> (label, example)
CASE_FORMATS = {
    CASE_SNAKE: ("Snake Case", "my_file_name.jpg"),
    CASE_KEBAB: ("Kebab Case", "my-file-name.jpg"),
    CASE_PASCAL: ("Pascal Case", "MyFileName.jpg"),
    CASE_CAMEL: ("Camel Case", "myFileName.jpg"),
    CASE_CAPITAL: ("Capital Case", "My File Name.jpg"),
    CASE_LOWERCASE: ("Lowercase Spaces", "my file name.jpg"),
    CASE_SENTENCE: ("Sentence Case", "My file name.jpg"),
}

# Accepted input files
ALLOWED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")

# Limits
MAX_FILENAME_LENGTH = 200
REQUEST_TIMEOUT_SECONDS = 10.0

# Request parameters
DESCRIPTION_MAX_TOKENS = 50
DESCRIPTION_TEMPERATURE = 1.0

DESCRIPTION_PROMPT = (
    "Create a descriptive filename for this image using 2-5 English words "
    "separated by spaces. Use only lowercase letters, numbers and spaces, no "
    "punctuation or special characters. Return only the filename with no "
    "additional text or explanations."
)
