"""
Definição do schema de Shares (compartilhamentos de arquivos).

Um share é um convite ligado a um arquivo: além dos campos de convite,
guarda o arquivo de origem, os formatos de exportação disponíveis e
restrições opcionais de destinatário e validade.
"""
import mimetypes
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

from ..table import ColumnConstraints, Required, Unique
from ._values import join_list, optional_str, split_list
from .invite_schema import RegisterableSource

SHARES_TABLE_NAME = "shares"
SHARES_TABLE_HEADER = [
    "id",
    "is_admin",
    "created",
    "created_by",
    "claimed_by",
    "claimed",
    "backing_url",
    "file_title",
    "file_type",
    "available_media_types",
    "to_username",
    "expire_duration",
]
SHARES_CONSTRAINTS = ColumnConstraints.of(
    Required("id"),
    Required("created_by"),
    Unique("id"),
)


@dataclass(frozen=True)
class MediaType:
    """
    Formato em que um arquivo compartilhado pode ser baixado.

    Attributes:
        name (str): Tipo MIME (ex: application/pdf).
        description (str): Descrição legível.
        extension (str): Extensão sem ponto (ex: pdf).
    """
    name: str
    description: str
    extension: str

    @classmethod
    def from_name(cls, name: str) -> "MediaType":
        extension = mimetypes.guess_extension(name) or ""
        return cls(name=name, description=name, extension=extension.lstrip("."))


@dataclass
class Share(RegisterableSource):
    """
    Compartilhamento de arquivo.

    Attributes:
        backing_url (str): URL do arquivo de origem.
        file_title (str): Título do arquivo.
        file_type (str): Tipo do arquivo (document, spreadsheet, presentation, pdf, image, video).
        available_media_types (list[MediaType]): Formatos disponíveis para download.
        to_username (str | None): Restringe o resgate a um nome de usuário.
        expire_duration (str | None): Validade após o resgate, como duração ISO 8601 (ex: PT1H).
    """
    source_type: ClassVar[str] = "share"

    backing_url: str = ""
    file_title: str = ""
    file_type: str = "document"
    available_media_types: list[MediaType] = field(default_factory=list)
    to_username: str | None = None
    expire_duration: str | None = None

    def to_row(self) -> dict[str, Any]:
        row = super().to_row()
        row.update({
            "backing_url": self.backing_url,
            "file_title": self.file_title,
            "file_type": self.file_type,
            "available_media_types": join_list([m.name for m in self.available_media_types]),
            "to_username": self.to_username or "",
            "expire_duration": self.expire_duration or "",
        })
        return row

    @classmethod
    def from_rows(
        cls,
        share_row: Mapping[str, Any],
        created_by_row: Mapping[str, Any],
        claimed_by_row: Mapping[str, Any] | None = None,
    ) -> "Share":
        """
        Reconstrói o share a partir da sua linha e das linhas dos usuários relacionados.
        """
        return cls(
            **cls._common_fields(share_row, created_by_row, claimed_by_row),
            backing_url=str(share_row.get("backing_url", "")),
            file_title=str(share_row.get("file_title", "")),
            file_type=str(share_row.get("file_type", "document")),
            available_media_types=[
                MediaType.from_name(name)
                for name in split_list(share_row.get("available_media_types"))
            ],
            to_username=optional_str(share_row.get("to_username")),
            expire_duration=optional_str(share_row.get("expire_duration")),
        )
