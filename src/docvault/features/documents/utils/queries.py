"""Documents SQL query constants.

All queries are parameterized by schema so one repository class can serve
any schema.
"""

DOCUMENT_COLUMNS = """
    id, filename, original_name, mime_type, size, uploaded_by, status, created_at, updated_at
"""

VERSION_COLUMNS = """
    id, document_id, version_number, filename, original_name, mime_type, size,
    path, content_ref, checksum, uploaded_by, created_at
"""

# =====================================================================================
# DOCUMENTS
# =====================================================================================

DOCUMENT_UPSERT = """
    INSERT INTO {schema}.documents (
        id, filename, original_name, mime_type, size, uploaded_by, status, created_at, updated_at
    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
    ON CONFLICT (id) DO UPDATE SET
        filename = EXCLUDED.filename,
        original_name = EXCLUDED.original_name,
        mime_type = EXCLUDED.mime_type,
        size = EXCLUDED.size,
        status = EXCLUDED.status,
        updated_at = EXCLUDED.updated_at
"""

DOCUMENT_GET_BY_ID = """
    SELECT """ + DOCUMENT_COLUMNS + """
    FROM {schema}.documents
    WHERE id = $1
"""

DOCUMENT_GET_BY_FILENAME_AND_USER = """
    SELECT """ + DOCUMENT_COLUMNS + """
    FROM {schema}.documents
    WHERE filename = $1 AND uploaded_by = $2
    ORDER BY created_at DESC
    LIMIT 1
"""

DOCUMENT_LIST_BY_USER = """
    SELECT """ + DOCUMENT_COLUMNS + """
    FROM {schema}.documents
    WHERE uploaded_by = $1
    ORDER BY created_at DESC, id DESC
    LIMIT $2 OFFSET $3
"""

DOCUMENT_COUNT_BY_USER = """
    SELECT COUNT(*) FROM {schema}.documents WHERE uploaded_by = $1
"""

DOCUMENT_LIST_ALL = """
    SELECT """ + DOCUMENT_COLUMNS + """
    FROM {schema}.documents
    ORDER BY created_at DESC, id DESC
    LIMIT $1 OFFSET $2
"""

DOCUMENT_COUNT_ALL = """
    SELECT COUNT(*) FROM {schema}.documents
"""

DOCUMENT_SEARCH = """
    SELECT """ + DOCUMENT_COLUMNS + """
    FROM {schema}.documents
    WHERE filename ILIKE $1 ESCAPE '\\' OR original_name ILIKE $1 ESCAPE '\\'
    ORDER BY created_at DESC, id DESC
    LIMIT $2 OFFSET $3
"""

DOCUMENT_SEARCH_COUNT = """
    SELECT COUNT(*) FROM {schema}.documents
    WHERE filename ILIKE $1 ESCAPE '\\' OR original_name ILIKE $1 ESCAPE '\\'
"""

DOCUMENT_DELETE = """
    DELETE FROM {schema}.documents WHERE id = $1
"""

# =====================================================================================
# VERSIONS
# =====================================================================================

# Only the storage fields of an existing version may change.
VERSION_UPSERT = """
    INSERT INTO {schema}.document_versions (
        id, document_id, version_number, filename, original_name, mime_type, size,
        path, content_ref, checksum, uploaded_by, created_at
    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
    ON CONFLICT (id) DO UPDATE SET
        path = EXCLUDED.path,
        content_ref = EXCLUDED.content_ref,
        checksum = EXCLUDED.checksum
"""

VERSIONS_FOR_DOCUMENTS = """
    SELECT """ + VERSION_COLUMNS + """
    FROM {schema}.document_versions
    WHERE document_id = ANY($1::uuid[])
    ORDER BY document_id, version_number
"""

VERSION_DOCUMENT_BY_CHECKSUM = """
    SELECT document_id FROM {schema}.document_versions
    WHERE checksum = $1
    ORDER BY created_at
    LIMIT 1
"""

VERSION_DOCUMENT_BY_CONTENT_REF = """
    SELECT document_id FROM {schema}.document_versions
    WHERE content_ref = $1
    ORDER BY created_at
    LIMIT 1
"""

# =====================================================================================
# AUDIT
# =====================================================================================

AUDIT_INSERT = """
    INSERT INTO {schema}.document_audit (
        id, document_id, action, performed_by, details, performed_at
    ) VALUES ($1, $2, $3, $4, $5, $6)
"""

AUDIT_LIST_BY_DOCUMENT = """
    SELECT id, document_id, action, performed_by, details, performed_at
    FROM {schema}.document_audit
    WHERE document_id = $1
    ORDER BY performed_at, id
"""
