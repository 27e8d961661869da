import requests
from typing import Dict, List, Optional

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


def build_request_body(prompt: str, voice_name: str, language_code: str) -> Dict:
    """
    Build a generateContent body that asks for AUDIO output

    Args:
        prompt (str): text to speak, including any style preamble
        voice_name (str): prebuilt voice id (e.g. "Puck")
        language_code (str): BCP-47 code (e.g. "ko-KR")
    """
    safety: List[Dict[str, str]] = [
        {"category": c, "threshold": "BLOCK_NONE"} for c in SAFETY_CATEGORIES
    ]
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseModalities": ["AUDIO"],
            "speechConfig": {
                "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice_name}},
                "languageCode": language_code,
            },
        },
        "safetySettings": safety,
    }


def generate_content(url: str, api_key: str, body: Dict,
                     timeout: Optional[float] = 120.0) -> Dict:
    """
    POST to generateContent and return the decoded JSON

    Error statuses whose body carries a JSON ``error`` object are returned
    as-is so callers can report the API message; any other failure raises
    requests.exceptions.RequestException.
    """
    response = requests.post(
        url,
        params={"key": api_key},
        headers={"Content-Type": "application/json"},
        json=body,
        timeout=timeout,
    )
    if response.status_code >= 400:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "error" in payload:
            return payload
        response.raise_for_status()
    return response.json()
