# scripts/send_command.py

import os

import requests
from dotenv import load_dotenv

# --- CONFIGURATION ---
load_dotenv()

DEFAULT_URL = "http://localhost:8000/slack/lunch"
SLACK_TOKEN = os.getenv("SLACK_TOKEN", "")


def send_command(url, text, token=SLACK_TOKEN):
    """Posts a form-encoded payload shaped like Slack's slash command request."""
    payload = {
        "token": token,
        "command": "/lunch",
        "text": text,
        "user_name": "local-test",
    }
    return requests.post(url, data=payload, timeout=10)


def main(url, text, token=SLACK_TOKEN):
    print(f"Sending '/lunch {text}' to {url}...")
    response = send_command(url, text, token)
    print(f"HTTP {response.status_code}")
    print(response.text)


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Send a /lunch slash command to a running lunch bot.")
    parser.add_argument("text", nargs="*", help="Command text, e.g. 'add Sushi Place' or 'list'.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Endpoint to post to.")
    parser.add_argument("--token", default=SLACK_TOKEN, help="Verification token (defaults to SLACK_TOKEN).")
    args = parser.parse_args()
    main(args.url, " ".join(args.text), token=args.token)
