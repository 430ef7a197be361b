from dataclasses import dataclass
import os

from dotenv import load_dotenv

# Carrega as variáveis de ambiente do arquivo .env
load_dotenv()

@dataclass(frozen=True)
class Config:
    """
    Configurações de acesso à planilha, obtidas de variáveis de ambiente.

    Attributes:
        spreadsheet_id (str | None): ID da planilha, obtido da variável de ambiente SPREADSHEET_ID.
        service_account_file (str | None): Caminho para o arquivo de conta de serviço, obtido da variável de ambiente SERVICE_ACCOUNT_FILE.
        log_level (str | None): Nível de log do ponto de entrada, obtido da variável de ambiente LOG_LEVEL (padrão INFO).
    """
    spreadsheet_id: str | None = None
    service_account_file: str | None = None
    log_level: str | None = None

    def __post_init__(self):
        if self.spreadsheet_id is None:
            object.__setattr__(self, 'spreadsheet_id', os.getenv('SPREADSHEET_ID'))
        if self.service_account_file is None:
            object.__setattr__(self, 'service_account_file', os.getenv('SERVICE_ACCOUNT_FILE'))
        if self.log_level is None:
            object.__setattr__(self, 'log_level', os.getenv('LOG_LEVEL') or 'INFO')

        if not self.spreadsheet_id:
            raise ValueError("A variável de ambiente 'SPREADSHEET_ID' é obrigatória.")
        if not self.service_account_file:
            raise ValueError("A variável de ambiente 'SERVICE_ACCOUNT_FILE' é obrigatória.")

        object.__setattr__(self, 'log_level', self.log_level.upper())
