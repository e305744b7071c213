import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "data")
    JSON_STORE_INDENT = os.getenv("JSON_STORE_INDENT", "2")
    JSON_STORE_SKIP_NONE = os.getenv("JSON_STORE_SKIP_NONE", "false")
    JSON_STORE_SORT_KEYS = os.getenv("JSON_STORE_SORT_KEYS", "false")
    JSON_STORE_ENSURE_ASCII = os.getenv("JSON_STORE_ENSURE_ASCII", "false")


class TestConfig(Config):
    TESTING = True
    JSON_STORE_PATH = os.getenv("JSON_STORE_TEST_PATH", "test_data")
