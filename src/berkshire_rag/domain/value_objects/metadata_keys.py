"""Chunk metadata keys shared by ingestion, the store and the query surfaces."""

SOURCE = "source"
FILE_NAME = "fileName"
TYPE = "type"
CHUNK_INDEX = "chunkIndex"
TOTAL_CHUNKS = "totalChunks"
PAGE_COUNT = "pageCount"
TITLE = "title"
AUTHOR = "author"
CREATED_DATE = "createdDate"
MODIFIED_DATE = "modifiedDate"
YEAR = "year"
COMPANY = "company"
DOCUMENT_TYPE = "documentType"

# Values stamped on every chunk of a shareholder letter
LETTER_COMPANY = "Berkshire Hathaway"
LETTER_DOCUMENT_TYPE = "shareholder_letter"
