from typing import Dict, TypedDict

# ключи совпадают с форматом ответа API Gateway, поэтому camelCase
Envelope = TypedDict("Envelope", {
    "headers": Dict[str, str],
    "statusCode": int,
    "body": str,
    "isBase64Encoded": bool,
})
