"""DocxDocument → IrDocument 조립"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from docx2ir.convert.anchor import AnchorResolver
from docx2ir.convert.classifier import BlockClassifier, BlockStructurer
from docx2ir.convert.context import ConversionContext, ReaderOptions
from docx2ir.convert.inlines import InlineConverter
from docx2ir.convert.lists import blocks_to_bullets, blocks_to_definitions
from docx2ir.convert.metadata import MetadataExtractor, sep_body_parts
from docx2ir.convert.revision import RevisionPolicy
from docx2ir.docx.models import DocxDocument
from docx2ir.ir.models import IrDocument
from docx2ir.media import MediaStore

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """변환 결과"""
    document: IrDocument
    warnings: List[str] = field(default_factory=list)
    media: Optional[MediaStore] = None


class DocumentAssembler:
    """문서 조립기

    변환마다 새 ConversionContext를 만들고, 메타데이터 추출 → 본문 분류 →
    목록/정의 목록 구조화 → 내부 링크 재작성 순으로 진행한다.
    """

    def __init__(
        self,
        options: Optional[ReaderOptions] = None,
        media_store: Optional[MediaStore] = None,
        list_structurer: BlockStructurer = blocks_to_bullets,
        definition_structurer: BlockStructurer = blocks_to_definitions,
    ):
        self.options = options or ReaderOptions()
        self.media_store = media_store
        self.list_structurer = list_structurer
        self.definition_structurer = definition_structurer

    def convert(self, docx: DocxDocument, parser_warnings: Iterable[str] = ()) -> ConversionResult:
        context = ConversionContext(self.options, self.media_store)
        context.warnings.extend(parser_warnings)

        anchor_resolver = AnchorResolver(context)
        inline_converter = InlineConverter(context, RevisionPolicy(context), anchor_resolver)
        classifier = BlockClassifier(
            context,
            inline_converter,
            anchor_resolver,
            self.list_structurer,
            self.definition_structurer,
        )

        meta_parts, body_parts = sep_body_parts(docx.body)
        meta = MetadataExtractor(inline_converter).extract(meta_parts)
        logger.debug("Found %d metadata paragraphs, %d body parts", len(meta_parts), len(body_parts))

        blocks = classifier.classify_all(body_parts)
        blocks = self.definition_structurer(self.list_structurer(blocks))
        blocks = anchor_resolver.rewrite_links(blocks)

        return ConversionResult(
            document=IrDocument(meta=meta, blocks=blocks),
            warnings=list(context.warnings),
            media=context.media_store,
        )
