from typing import Optional

import jwt

from fitbook.utils.logging_utils import log


def decode_jwt_claims(token, signing_key, algorithms, api_audience, issuer) -> Optional[dict]:
    claims = decode_jwt(token, signing_key, algorithms, api_audience, issuer)
    if claims.get("sub", None) is None:
        return None
    return claims


def decode_jwt(token, signing_key, algorithms, api_audience, issuer):
    try:
        return jwt.decode(
            token,
            signing_key,
            algorithms=algorithms,
            audience=api_audience,
            issuer=issuer,
        )
    except jwt.PyJWTError as e:
        log.debug(f"Failed to decode token: {e}")
        return {"status": "error", "message": str(e)}
