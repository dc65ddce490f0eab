import json
from typing import Any, Dict, List, Mapping

USER_PREFIX = "Here is ESG data in JSON:\n"


def build_insight_messages(
    system_prompt: str, payload: Mapping[str, Any]
) -> List[Dict[str, str]]:
    """
    Build the role-tagged chat messages for an insight request.

    The model receives:
    - The section's system prompt (analyst persona + output format)
    - The ESG payload, pretty-printed as JSON, exactly as the dashboard holds it
    """
    return [
        {"role": "system", "content": system_prompt},
        {
            "role": "user",
            "content": USER_PREFIX + json.dumps(payload, indent=2, ensure_ascii=False),
        },
    ]
