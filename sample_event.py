import os

import requests
from dotenv import load_dotenv

load_dotenv()

# --- CONFIGURATION ---
# VERIFY_TOKEN must match the server's, otherwise the handshake gets a 403.
VERIFY_TOKEN = os.getenv("VERIFY_TOKEN", "")
if not VERIFY_TOKEN:
    print("⚠️ WARNING: VERIFY_TOKEN not found in environment variables.")

URL = f"http://127.0.0.1:{os.getenv('PORT', '3000')}/webhook"

# --- 1. PAYLOAD ---
# Same envelope shape the Cloud API delivers. Change "body" to try other replies.
payload = {
    "object": "whatsapp_business_account",
    "entry": [{
        "id": "WHATSAPP_BUSINESS_ACCOUNT_ID",
        "changes": [{
            "field": "messages",
            "value": {
                "messaging_product": "whatsapp",
                "metadata": {
                    "display_phone_number": "15550000000",
                    "phone_number_id": os.getenv("PHONE_NUMBER_ID", "123456789"),
                },
                "contacts": [{"profile": {"name": "Test User"}, "wa_id": "14155552671"}],
                "messages": [{
                    "from": "14155552671",
                    "id": "wamid.sample",
                    "timestamp": "1706522400",
                    "type": "text",
                    "text": {"body": "Hello! Testing the menu."},
                }],
            },
        }],
    }],
}

# --- 2. HANDSHAKE ---
try:
    params = {"hub.mode": "subscribe", "hub.verify_token": VERIFY_TOKEN, "hub.challenge": "1158201444"}
    response = requests.get(URL, params=params)
    print(f"Verify status: {response.status_code} | Body: {response.text}")

    # --- 3. SEND ---
    print(f"Sending to {URL}...")
    response = requests.post(URL, json=payload)

    print(f"Status: {response.status_code}")
    print(f"Body: {response.json()}")

except Exception as e:
    print(f"Error: {e}")
