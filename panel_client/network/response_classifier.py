"""
Network - Response Classifier

Transforme un échange terminé en une Outcome unique.

Ordre de décision:
    1. Pas de réponse → NETWORK_ERROR
    2. Statut 401 → UNAUTHORIZED (prioritaire sur l'enveloppe)
    3. Statut 403 / 404 / 500 → FORBIDDEN / NOT_FOUND / SERVER_ERROR
    4. Enveloppe code 200 sur statut 2xx → SUCCESS(data, ou enveloppe complète si data absent)
    5. Enveloppe code 401 → UNAUTHORIZED (expiration côté métier)
    6. Autre code → BUSINESS_ERROR(code, message)

Un corps non décodable, ou un code non entier ("200" compris), donne UNKNOWN(raw).
"""

from typing import Any, Dict

from pydantic import ValidationError

from .interfaces import Envelope, Exchange, IResponseClassifier, Outcome, OutcomeKind


STATUS_OUTCOMES: Dict[int, OutcomeKind] = {
    401: OutcomeKind.UNAUTHORIZED,
    403: OutcomeKind.FORBIDDEN,
    404: OutcomeKind.NOT_FOUND,
    500: OutcomeKind.SERVER_ERROR,
}

SUCCESS_CODE = 200
UNAUTHORIZED_CODE = 401


class ResponseClassifier(IResponseClassifier):
    """
    Classification totale et exclusive des échanges.

    Un statut 2xx est nécessaire mais pas suffisant: seul code == 200 dans
    l'enveloppe est un succès.
    """

    def classify(self, exchange: Exchange) -> Outcome:
        response = exchange.response
        if response is None:
            reason = str(exchange.error) if exchange.error else None
            return Outcome(OutcomeKind.NETWORK_ERROR, message=reason)

        status = response.status
        if status in STATUS_OUTCOMES:
            return Outcome(STATUS_OUTCOMES[status], status=status)

        try:
            raw = response.json()
        except ValueError:
            return Outcome.unknown(response.content, status=status)

        if not isinstance(raw, dict):
            return Outcome.unknown(raw, status=status)

        try:
            envelope = Envelope.model_validate(raw)
        except ValidationError:
            return Outcome.unknown(raw, status=status)

        return self._classify_envelope(envelope, raw, status, response.is_success)

    def _classify_envelope(
        self, envelope: Envelope, raw: Dict[str, Any], status: int, transport_ok: bool
    ) -> Outcome:
        if envelope.code == SUCCESS_CODE:
            if not transport_ok:
                return Outcome.unknown(raw, status=status)
            data = envelope.data if envelope.data is not None else raw
            return Outcome.success(data, status=status)

        if envelope.code == UNAUTHORIZED_CODE:
            return Outcome(
                OutcomeKind.UNAUTHORIZED,
                code=envelope.code,
                message=envelope.message,
                status=status,
            )

        return Outcome.business_error(envelope.code, envelope.message, status=status)
