"""
Esquemas Pydantic para notas y adjuntos.

Los nombres en el JSON son camelCase (contrato con el frontend y con los
documentos ya guardados); en Python se usan atributos snake_case con alias.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NoteStatus = Literal["draft", "completed"]


class AttachmentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    file_name: str = Field(alias="fileName")
    file_size: int = Field(alias="fileSize")
    file_type: str = Field(alias="fileType")
    file_path: str = Field(alias="filePath", description="Ruta pública, p.ej. /uploads/<nombre>")


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    status: NoteStatus = "draft"
    created_at: int = Field(alias="createdAt", description="epoch ms")
    updated_at: int = Field(alias="updatedAt", description="epoch ms")
    attachments: List[AttachmentOut] = Field(default_factory=list)


class NoteUpdate(BaseModel):
    """Cuerpo JSON de PUT. Campos vacíos u omitidos conservan el valor previo."""

    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
