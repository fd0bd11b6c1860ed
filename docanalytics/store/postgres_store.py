from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docanalytics.classification.models import ClassificationResult
from docanalytics.extraction.models import (
    DocumentFormat,
    DocumentMetadata,
    ExtractedDocument,
    TitleSource,
)
from docanalytics.store.base import DocumentStore
from docanalytics.store.connection import get_connection
from docanalytics.store.models import IndexedDocument

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    owner TEXT NOT NULL,
    filename TEXT NOT NULL,
    media_type TEXT NOT NULL,
    size_bytes BIGINT NOT NULL,
    blob_path TEXT NOT NULL,
    format TEXT NOT NULL,
    title TEXT NOT NULL,
    title_source TEXT NOT NULL,
    content TEXT NOT NULL,
    word_count INTEGER NOT NULL,
    page_count INTEGER NOT NULL,
    language TEXT NOT NULL,
    category TEXT NOT NULL,
    subcategory TEXT NOT NULL,
    confidence DOUBLE PRECISION NOT NULL,
    algorithm TEXT NOT NULL,
    keywords JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL
);
CREATE INDEX IF NOT EXISTS documents_owner_created_idx ON documents (owner, created_at DESC);
"""

_COLUMNS = """
    id, owner, filename, media_type, size_bytes, blob_path, format, title,
    title_source, content, word_count, page_count, language, category,
    subcategory, confidence, algorithm, keywords, created_at, updated_at
"""


class PostgresDocumentStore(DocumentStore):
    """Database operations for the documents table."""

    def ensure_schema(self) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA)
            conn.commit()

    def get(self, document_id: str) -> IndexedDocument | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()
        return _to_document(row) if row is not None else None

    def put(self, document: IndexedDocument) -> str:
        extracted = document.extracted
        classification = document.classification
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents ({_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                            %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (id) DO UPDATE SET
                        owner = EXCLUDED.owner,
                        filename = EXCLUDED.filename,
                        media_type = EXCLUDED.media_type,
                        size_bytes = EXCLUDED.size_bytes,
                        blob_path = EXCLUDED.blob_path,
                        format = EXCLUDED.format,
                        title = EXCLUDED.title,
                        title_source = EXCLUDED.title_source,
                        content = EXCLUDED.content,
                        word_count = EXCLUDED.word_count,
                        page_count = EXCLUDED.page_count,
                        language = EXCLUDED.language,
                        category = EXCLUDED.category,
                        subcategory = EXCLUDED.subcategory,
                        confidence = EXCLUDED.confidence,
                        algorithm = EXCLUDED.algorithm,
                        keywords = EXCLUDED.keywords,
                        updated_at = EXCLUDED.updated_at
                    """,
                    (
                        document.id,
                        document.owner,
                        document.filename,
                        document.media_type,
                        document.size_bytes,
                        document.blob_path,
                        extracted.format.value,
                        extracted.title,
                        extracted.title_source.value,
                        extracted.content,
                        extracted.metadata.word_count,
                        extracted.metadata.page_count,
                        extracted.metadata.language,
                        classification.category,
                        classification.subcategory,
                        classification.confidence,
                        classification.algorithm,
                        Jsonb(list(classification.keywords)),
                        document.created_at,
                        document.updated_at,
                    ),
                )
            conn.commit()
        return document.id

    def delete(self, document_id: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def list_by_owner(self, owner: str) -> list[IndexedDocument]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM documents
                    WHERE owner = %s
                    ORDER BY created_at DESC, id
                    """,
                    (owner,),
                )
                rows = cur.fetchall()
        return [_to_document(row) for row in rows]


def _to_document(row: dict[str, Any]) -> IndexedDocument:
    return IndexedDocument(
        id=row["id"],
        owner=row["owner"],
        filename=row["filename"],
        media_type=row["media_type"],
        size_bytes=row["size_bytes"],
        blob_path=row["blob_path"],
        extracted=ExtractedDocument(
            title=row["title"],
            content=row["content"],
            metadata=DocumentMetadata(
                word_count=row["word_count"],
                page_count=row["page_count"],
                language=row["language"],
            ),
            title_source=TitleSource(row["title_source"]),
            format=DocumentFormat(row["format"]),
        ),
        classification=ClassificationResult(
            category=row["category"],
            subcategory=row["subcategory"],
            confidence=row["confidence"],
            algorithm=row["algorithm"],
            keywords=tuple(row["keywords"] or ()),
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
