"""Registro explícito de handlers de callback SMS.

O identificador do handler viaja assinado na URL de callback (parâmetro "h").
No recebimento, o identificador decodificado é procurado neste registro,
populado no startup; nunca há instanciação dinâmica por nome.

Uso:
    registry = CallbackHandlerRegistry()

    @registry.handler("orders.delivery", CallbackType.DLR)
    async def on_delivery(dlr: DlrCallbackData, context: dict[str, Any]) -> None:
        ...

    registry.listen(CallbackType.REPLY, audit_reply)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from config.logging import log_fallback

if TYPE_CHECKING:
    from api.normalizers.sms import CallbackData
    from app.constants.sms import CallbackType

logger = logging.getLogger(__name__)

CallbackHandler = Callable[[Any, dict[str, Any]], Awaitable[None] | None]


@dataclass(frozen=True, slots=True)
class RegisteredHandler:
    identifier: str
    callback_type: CallbackType
    handler: CallbackHandler


async def _invoke(handler: CallbackHandler, payload: CallbackData, context: dict[str, Any]) -> None:
    result = handler(payload, context)
    if inspect.isawaitable(result):
        await result


class CallbackHandlerRegistry:
    """Mapeia identificadores para handlers e mantém listeners globais."""

    def __init__(self) -> None:
        self._handlers: dict[str, RegisteredHandler] = {}
        self._listeners: dict[CallbackType, list[CallbackHandler]] = {}

    def register(
        self,
        identifier: str,
        callback_type: CallbackType,
        handler: CallbackHandler,
    ) -> None:
        """Registra handler para um identificador.

        Raises:
            ValueError: Identificador vazio ou já registrado.
        """
        if not identifier:
            raise ValueError("callback handler identifier must not be empty")
        if identifier in self._handlers:
            raise ValueError(f"callback handler already registered: {identifier}")
        self._handlers[identifier] = RegisteredHandler(identifier, callback_type, handler)

    def handler(
        self,
        identifier: str,
        callback_type: CallbackType,
    ) -> Callable[[CallbackHandler], CallbackHandler]:
        """Decorator equivalente a register()."""

        def decorator(func: CallbackHandler) -> CallbackHandler:
            self.register(identifier, callback_type, func)
            return func

        return decorator

    def listen(self, callback_type: CallbackType, listener: CallbackHandler) -> None:
        """Listener chamado em todo callback do tipo, com ou sem handler."""
        self._listeners.setdefault(callback_type, []).append(listener)

    def get(self, identifier: str) -> RegisteredHandler | None:
        return self._handlers.get(identifier)

    def is_registered(self, identifier: str) -> bool:
        return identifier in self._handlers

    async def notify(
        self,
        callback_type: CallbackType,
        payload: CallbackData,
        context: dict[str, Any],
    ) -> int:
        """Chama os listeners do tipo. Retorna quantos executaram sem erro."""
        delivered = 0
        for listener in self._listeners.get(callback_type, []):
            try:
                await _invoke(listener, payload, context)
            except Exception:
                logger.exception(
                    "sms_callback_listener_failed",
                    extra={"callback_type": str(callback_type)},
                )
                continue
            delivered += 1
        return delivered

    async def dispatch(
        self,
        callback_type: CallbackType,
        identifier: str,
        payload: CallbackData,
        context: dict[str, Any],
    ) -> bool:
        """Executa o handler registrado para o identificador.

        Handler desconhecido, de outro tipo ou que falha é logado e ignorado:
        o provedor sempre recebe 200 depois de uma assinatura válida.

        Returns:
            True se o handler executou com sucesso.
        """
        registered = self._handlers.get(identifier)
        if registered is None:
            logger.warning(
                "sms_callback_handler_not_found",
                extra={"callback_type": str(callback_type), "handler": identifier},
            )
            log_fallback(logger, "sms_callback_dispatch", reason="handler_not_found")
            return False

        if registered.callback_type != callback_type:
            logger.warning(
                "sms_callback_handler_type_mismatch",
                extra={
                    "callback_type": str(callback_type),
                    "expected_type": str(registered.callback_type),
                    "handler": identifier,
                },
            )
            return False

        try:
            await _invoke(registered.handler, payload, context)
        except Exception:
            logger.exception(
                "sms_callback_handler_failed",
                extra={"callback_type": str(callback_type), "handler": identifier},
            )
            return False

        logger.info(
            "sms_callback_handler_dispatched",
            extra={"callback_type": str(callback_type), "handler": identifier},
        )
        return True
