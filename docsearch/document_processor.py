"""
Document text extraction for docsearch

Handles:
1. XML / XHTML: text nodes joined with single spaces (markup dropped)
2. HTML: flat text via html2text
3. Plain text formats: UTF-8 decode (latin-1 fallback)

The search engine only sees the flat text returned here.
"""

import logging
from pathlib import Path
from typing import List, Union
from xml.parsers.expat import ExpatError

import html2text
import xmltodict

logger = logging.getLogger(__name__)


class DocumentExtractionError(ValueError):
    """Document content could not be parsed"""


class UnsupportedDocumentError(ValueError):
    """No extractor for this file type"""


XML_TYPES = {'xml', 'xhtml', 'application/xml', 'text/xml', 'application/xhtml+xml'}
HTML_TYPES = {'html', 'htm', 'text/html'}
TEXT_TYPES = {
    'txt', 'text/plain',
    'md', 'markdown', 'text/markdown',
    'rst', 'text/x-rst',
    'csv', 'text/csv',
    'log', 'text/x-log',
}


def _collect_text(node, parts: List[str]):
    """Append every text node under an xmltodict node, skipping attributes"""
    if node is None:
        return
    if isinstance(node, str):
        parts.append(node)
    elif isinstance(node, dict):
        for key, value in node.items():
            if key.startswith('@'):
                continue
            _collect_text(value, parts)
    elif isinstance(node, list):
        for item in node:
            _collect_text(item, parts)


class DocumentProcessor:
    """Turn source documents into flat text for indexing"""

    @property
    def supported_extensions(self) -> set[str]:
        """File suffixes (with dot) this processor can read"""
        return {
            f".{file_type}"
            for file_type in XML_TYPES | HTML_TYPES | TEXT_TYPES
            if '/' not in file_type
        }

    def extract_text_from_txt(self, txt_source: bytes) -> str:
        """
        Decode plain text

        Args:
            txt_source: Raw file bytes

        Returns:
            Text content
        """
        try:
            return txt_source.decode('utf-8')
        except UnicodeDecodeError:
            # latin-1 never fails
            logger.warning("UTF-8 decode failed, using latin-1")
            return txt_source.decode('latin-1', errors='replace')

    def extract_text_from_xml(self, xml_source: bytes) -> str:
        """
        Extract text nodes from XML / XHTML

        Every text node is followed by a single space, so words from
        adjacent elements never merge ("<b>gl</b>Bind" → "gl Bind ").

        Args:
            xml_source: XML bytes

        Returns:
            Concatenated text nodes

        Raises:
            DocumentExtractionError: If the XML is malformed
        """
        try:
            data = xmltodict.parse(
                xml_source,
                attr_prefix='@',
                cdata_key='#text',
                cdata_separator=' ',   # mixed content: text around child elements
                strip_whitespace=True,
            )
        except ExpatError as e:
            raise DocumentExtractionError(f"Malformed XML: {e}") from e

        parts: List[str] = []
        _collect_text(data, parts)
        return "".join(f"{part} " for part in parts)

    def extract_text_from_html(self, html_source: bytes) -> str:
        """
        Extract flat text from HTML

        Links, images and emphasis markers are dropped so they do not
        turn into punctuation tokens.

        Args:
            html_source: HTML bytes

        Returns:
            Plain text
        """
        html_string = html_source.decode('utf-8', errors='replace')

        converter = html2text.HTML2Text()
        converter.ignore_links = True
        converter.ignore_images = True
        converter.ignore_emphasis = True
        converter.body_width = 0  # No line wrapping

        return converter.handle(html_string)

    def extract_text(self, file_content: bytes, file_type: str) -> str:
        """
        Extract text from file based on type

        Args:
            file_content: File content as bytes
            file_type: File extension (.xhtml, .txt) or MIME type

        Returns:
            Extracted text

        Raises:
            UnsupportedDocumentError: Unknown file type
            DocumentExtractionError: Content could not be parsed
        """
        file_ext = file_type.lower()
        if file_ext.startswith('.'):
            file_ext = file_ext[1:]

        if file_ext in XML_TYPES:
            return self.extract_text_from_xml(file_content)

        elif file_ext in HTML_TYPES:
            return self.extract_text_from_html(file_content)

        elif file_ext in TEXT_TYPES:
            return self.extract_text_from_txt(file_content)

        else:
            raise UnsupportedDocumentError(
                f"Unsupported file type: {file_type}. "
                f"Supported: {', '.join(sorted(self.supported_extensions))}"
            )

    def read_document(self, path: Union[str, Path]) -> str:
        """Read a file from disk and extract its text based on the suffix"""
        path = Path(path)
        content = path.read_bytes()
        text = self.extract_text(content, path.suffix)
        logger.debug(f"Extracted {len(text)} chars from {path}")
        return text
