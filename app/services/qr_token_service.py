"""
QR Token Service - Signed checkpoint QR payloads
"""
import jwt
import uuid
from datetime import datetime
from typing import Dict, Any

from app.core.config import settings
from atams.exceptions import BadRequestException

ISSUER = "patrol-compliance"


class QrTokenService:
    def __init__(self) -> None:
        self.secret = settings.CHECKPOINT_QR_SECRET
        self.algorithm = settings.CHECKPOINT_QR_ALG

    def generate_checkpoint_token(self, checkpoint_id: int, site_id: str) -> str:
        """
        Sign the payload printed on a checkpoint QR code

        Checkpoint codes are physically posted, so the token carries no expiry.
        """
        payload = {
            "iss": ISSUER,
            "aud": f"checkpoint:{checkpoint_id}",
            "cp_id": checkpoint_id,
            "si_id": site_id,
            "jti": str(uuid.uuid4()),
            "iat": int(datetime.utcnow().timestamp())
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_checkpoint_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a scanned checkpoint token

        Args:
            token: JWT string from QR code

        Returns:
            dict: Decoded payload

        Raises:
            BadRequestException: If token is invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_aud": False}  # audience checked against cp_id below
            )
        except jwt.InvalidTokenError as e:
            raise BadRequestException(f"Invalid checkpoint code: {str(e)}")

        for field in ("iss", "aud", "cp_id", "si_id"):
            if field not in payload:
                raise BadRequestException(f"Missing required field: {field}")

        if payload["iss"] != ISSUER:
            raise BadRequestException("Invalid token issuer")

        if payload["aud"] != f"checkpoint:{payload['cp_id']}":
            raise BadRequestException("Checkpoint ID mismatch in token")

        return payload
