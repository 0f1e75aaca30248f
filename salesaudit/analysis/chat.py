"""Follow-up chat about a finished audit."""

from salesaudit.analysis.client_base import BaseAnalysisClient
from salesaudit.analysis.exceptions import AnalysisError, ChatError
from salesaudit.analysis.models import AnalysisResult, ChatMessage
from salesaudit.logging.logger import Log

CHAT_INSTRUCTIONS = (
    "Você é o FISCAL DE VENDA. Você já auditou uma conversa do usuário e agora está "
    "ajudando ele a tirar dúvidas, simular cenários ou criar novas mensagens. Seja "
    "direto, prático e especialista em vendas. Use o contexto da auditoria anterior "
    "para dar respostas personalizadas."
)
FALLBACK_REPLY = "Desculpe, não consegui processar sua resposta."

_ROLE_MAP = {"user": "user", "model": "assistant"}


class AuditChat:
    """Answers follow-up questions with the previous audit as context."""

    def __init__(self, *, client: BaseAnalysisClient, model: str) -> None:
        self._client = client
        self._model = model

    def reply(
        self,
        history: list[ChatMessage],
        message: str,
        context: AnalysisResult | None = None,
    ) -> str:
        messages = [{"role": _ROLE_MAP[m.role], "content": m.text} for m in history]
        messages.append({"role": "user", "content": message})
        try:
            answer = self._client.create_chat_reply(
                model=self._model,
                system_prompt=self.build_system_prompt(context),
                messages=messages,
            )
        except AnalysisError as exc:
            Log.error(f"Chat reply failed: {exc}", history_turns=len(history))
            raise ChatError("Could not send the message. Please try again.") from exc
        return answer.strip() or FALLBACK_REPLY

    @staticmethod
    def build_system_prompt(context: AnalysisResult | None) -> str:
        if context is None:
            return CHAT_INSTRUCTIONS
        error_names = ", ".join(e.name for e in context.errors)
        follow_ups = " | ".join(s.message for s in context.recovery_plan.sequence)
        return (
            f"{CHAT_INSTRUCTIONS}\n\n"
            "CONTEXTO DA AUDITORIA ANTERIOR:\n"
            f"Score: {context.summary.score}\n"
            f"Veredicto: {context.summary.verdict}\n"
            f"Erros Principais: {error_names}\n"
            f"Plano de Recuperação sugerido: {follow_ups}"
        )
