import logging
import threading
import time
from collections.abc import Callable
from typing import TypeVar

from gspread.exceptions import SpreadsheetNotFound, WorksheetNotFound

from ..errors import SheetDBError

logger = logging.getLogger(__name__)

ReturnType = TypeVar("ReturnType")

# Exceções que NÃO devem passar por retry (erros lógicos/esperados)
NON_RETRYABLE_EXCEPTIONS = (
    WorksheetNotFound,
    SpreadsheetNotFound,
    SheetDBError,
    ValueError,
    KeyError,
    TypeError,
)

# Estado global para rate limiting, compartilhado entre as threads de requisição
_rate_lock = threading.Lock()
_last_request_time: float = 0.0
_min_interval_seconds: float = 0.0


def configure_rate_limiting(min_interval_seconds: float) -> None:
    """
    Configura o intervalo mínimo entre requisições de leitura ao Google Sheets.

    Args:
        min_interval_seconds: Tempo mínimo entre duas requisições em segundos (0 desativa).
    """
    global _min_interval_seconds
    _min_interval_seconds = max(0.0, min_interval_seconds)
    logger.info("Rate limiting configurado: %.3fs entre requisições", _min_interval_seconds)


def _apply_rate_limit() -> None:
    """
    Aguarda o necessário para respeitar o intervalo mínimo entre requisições.
    """
    global _last_request_time

    with _rate_lock:
        elapsed = time.time() - _last_request_time
        delay = _min_interval_seconds - elapsed

        if delay > 0:
            logger.debug("Rate limiting: aguardando %.3fs", delay)
            time.sleep(delay)

        _last_request_time = time.time()


def retry(
    function: Callable[[], ReturnType],
    tries: int = 3,
    delay: float = 0.5,
    backoff: float = 2.0,
) -> ReturnType:
    """
    Tenta executar uma função várias vezes com um atraso exponencial entre as tentativas em caso de falha.

    Exceções lógicas/esperadas (WorksheetNotFound, SpreadsheetNotFound, SheetDBError, ValueError, etc.)
    NÃO passam por retry e são lançadas imediatamente.

    Deve ser usado apenas para leituras idempotentes: repetir um append poderia duplicar linhas.

    Args:
        function (Callable): A função a ser executada.
        tries (int): Número máximo de tentativas. Padrão é 3.
        delay (float): Atraso inicial entre as tentativas em segundos. Padrão é 0.5.
        backoff (float): Fator de multiplicação para o atraso após cada falha.
    Returns:
        O resultado da função executada, se bem-sucedida.
    """
    exception: Exception | None = None
    wait = delay

    for attempt in range(1, tries + 1):
        try:
            _apply_rate_limit()
            return function()

        except NON_RETRYABLE_EXCEPTIONS:
            raise

        except Exception as e:
            exception = e
            if attempt == tries:
                logger.error(
                    "Todas as tentativas falharam após %d tentativas: %s",
                    tries,
                    str(e),
                    exc_info=True,
                )
                break

            logger.warning(
                "Tentativa %d falhou com erro: %s. Retentando em %.2f segundos...",
                attempt,
                str(e),
                wait,
            )
            time.sleep(wait)
            wait *= backoff

    assert exception is not None
    raise exception
