import os

from dotenv import load_dotenv

load_dotenv()

APP_TITLE = os.getenv("APP_TITLE", "Badminton Sit-Out Rotation")
DEFAULT_NUM_MATCHES = int(os.getenv("DEFAULT_NUM_MATCHES", "7"))
EXPORT_FILENAME = os.getenv("EXPORT_FILENAME", "badminton_teams.txt")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
