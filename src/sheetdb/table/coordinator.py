"""
Coordenação de escritas.

O Google Sheets não oferece transações, locks nem tokens de concorrência.
Para que a sequência ler -> validar -> gravar não sofra corrida entre
requisições do mesmo processo, toda escrita (em qualquer tabela) passa por
uma única porta de exclusão mútua.
"""
import logging
import threading
from types import TracebackType

logger = logging.getLogger(__name__)


class WriteGate:
    """
    Exclusão mútua FIFO para operações de escrita.

    Cada chamada de ``acquire`` recebe uma senha; as senhas são atendidas na
    ordem em que foram emitidas, então nenhum escritor passa à frente de quem
    pediu antes. Não é reentrante: uma escrita não pode iniciar outra dentro
    da própria seção crítica.

    Uso::

        with gate:
            ...  # leitura, validação e escrita
    """

    def __init__(self):
        self._condition = threading.Condition()
        self._next_ticket = 0
        self._now_serving = 0
        self._abandoned: set[int] = set()

    def acquire(self) -> None:
        """Bloqueia até que seja a vez deste chamador."""
        with self._condition:
            ticket = self._next_ticket
            self._next_ticket += 1

            if ticket != self._now_serving:
                logger.debug(
                    "Aguardando porta de escrita (senha %d, atendendo %d).",
                    ticket,
                    self._now_serving,
                )
            try:
                while ticket != self._now_serving:
                    self._condition.wait()
            except BaseException:
                # Senha interrompida na fila não pode travar quem vem depois
                if ticket == self._now_serving:
                    self._advance()
                else:
                    self._abandoned.add(ticket)
                raise

    def release(self) -> None:
        """Libera a porta para o próximo chamador da fila."""
        with self._condition:
            if self._now_serving >= self._next_ticket:
                raise RuntimeError("release() chamado sem acquire() correspondente.")
            self._advance()

    def _advance(self) -> None:
        self._now_serving += 1
        while self._now_serving in self._abandoned:
            self._abandoned.remove(self._now_serving)
            self._now_serving += 1
        self._condition.notify_all()

    def locked(self) -> bool:
        """Indica se há uma escrita em andamento."""
        with self._condition:
            return self._now_serving < self._next_ticket

    def waiting(self) -> int:
        """Quantidade de chamadores aguardando, além do que está em andamento."""
        with self._condition:
            return max(0, self._next_ticket - self._now_serving - 1)

    def __enter__(self) -> "WriteGate":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()


# Porta única do processo: escritas em tabelas diferentes também se excluem
WRITE_GATE = WriteGate()
