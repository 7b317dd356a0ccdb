"""Integration tests for template extraction orchestration and persistence."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sqlalchemy import create_engine, delete, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tagmapper.extraction.extractor_interface import TagExtractorInterface
from tagmapper.extraction.types import DelimiterPair, ExtractedTagResult, ExtractionConfig, resolve_config
from tagmapper.models.base import Base
from tagmapper.models.extracted_tag import ExtractedTag
from tagmapper.models.tag_extraction_run import TagExtractionRun
from tagmapper.models.tag_mapping import TagMapping
from tagmapper.models.template import Template
from tagmapper.schemas.mapping import TagMappingInput
from tagmapper.schemas.template import TemplateCreate
from tagmapper.services.errors import (
    ContentUnavailableError,
    TagStorageError,
    TemplateNotFoundError,
    UnknownTagError,
)
from tagmapper.services.extraction import preview_extraction, run_extraction_for_template
from tagmapper.services.mappings import list_tag_mappings, replace_tag_mappings
from tagmapper.services.templates import create_template, list_extracted_tags, list_templates


class _RecordingExtractor(TagExtractorInterface):
    def __init__(self) -> None:
        self.calls: list[tuple[str, ExtractionConfig | None]] = []

    def extract(self, text: str, config: ExtractionConfig | None = None) -> list[ExtractedTagResult]:
        self.calls.append((text, config))
        return [
            ExtractedTagResult(
                text="[STUB]",
                tag_content="STUB",
                start_delimiter="[",
                end_delimiter="]",
                pattern="[...] tag",
                position=1,
                context="[STUB]",
                confidence=85,
            )
        ]


class _BrokenRowExtractor(TagExtractorInterface):
    def extract(self, text: str, config: ExtractionConfig | None = None) -> list[ExtractedTagResult]:
        return [
            ExtractedTagResult(
                text=None,  # type: ignore[arg-type]
                tag_content="BROKEN",
                start_delimiter="[",
                end_delimiter="]",
                pattern="[...] tag",
                position=1,
                context="",
                confidence=85,
            )
        ]


class _DatabaseTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        self.db: Session = self.SessionLocal()
        self.db.execute(delete(TagMapping))
        self.db.execute(delete(TagExtractionRun))
        self.db.execute(delete(ExtractedTag))
        self.db.execute(delete(Template))
        self.db.commit()
        self._storage = tempfile.TemporaryDirectory()
        self.storage_dir = Path(self._storage.name)

    def tearDown(self) -> None:
        self.db.close()
        self._storage.cleanup()

    def _create(self, name: str = "Contract", **fields) -> Template:
        return create_template(self.db, TemplateCreate(name=name, **fields), user_id="uploader-1")


class TemplateExtractionServiceTests(_DatabaseTestCase):
    def test_extracts_and_stores_tags_from_metadata_content(self) -> None:
        template = self._create(metadata={"content": "Dear [CLIENT_NAME], contract [CONTRACT_DATE]."})

        result = run_extraction_for_template(
            self.db,
            template.id,
            user_id="user-1",
            storage_dir=self.storage_dir,
        )

        self.assertEqual(result.template_id, template.id)
        self.assertEqual(result.template_name, "Contract")
        self.assertEqual(result.content_source, "metadata")
        self.assertEqual(result.tags_created, 2)
        stored = list_extracted_tags(self.db, template.id)
        self.assertEqual([tag.text for tag in stored], ["[CLIENT_NAME]", "[CONTRACT_DATE]"])
        self.assertEqual([tag.position for tag in stored], [1, 2])
        self.assertEqual([tag.pattern for tag in stored], ["Name field", "Date field"])
        self.assertTrue(all(tag.extracted_by == "user-1" for tag in stored))
        self.db.refresh(template)
        self.assertEqual(template.status, "completed")

    def test_extracted_text_wins_over_content(self) -> None:
        template = self._create(metadata={"content": "[FROM_CONTENT]", "extractedText": "[FROM_TEXT]"})

        run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

        self.assertEqual([tag.text for tag in list_extracted_tags(self.db, template.id)], ["[FROM_TEXT]"])

    def test_reextraction_replaces_previous_tags(self) -> None:
        template = self._create(metadata={"content": "[OLD_ONE] [OLD_TWO]"})
        run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

        template.metadata_json = {"content": "<<NEW_TAG>>"}
        self.db.commit()
        config = resolve_config(delimiter_pairs=[DelimiterPair("<<", ">>")], include_delimiters=False)
        result = run_extraction_for_template(self.db, template.id, config, storage_dir=self.storage_dir)

        self.assertEqual(result.tags_created, 1)
        stored = list_extracted_tags(self.db, template.id)
        self.assertEqual([(tag.text, tag.position) for tag in stored], [("NEW_TAG", 1)])
        runs = list(self.db.scalars(select(TagExtractionRun).order_by(TagExtractionRun.id)).all())
        self.assertEqual([run.tag_count for run in runs], [2, 1])
        self.assertEqual(runs[1].config_json["delimiter_pairs"], [{"start": "<<", "end": ">>"}])
        self.assertFalse(runs[1].config_json["include_delimiters"])

    def test_reads_content_from_storage_file(self) -> None:
        (self.storage_dir / "nested").mkdir()
        (self.storage_dir / "nested" / "letter.txt").write_text("Hello {RECIPIENT}", encoding="utf-8")
        template = self._create(file_path="nested/letter.txt")
        config = resolve_config(delimiter_pairs=[DelimiterPair("{", "}")])

        result = run_extraction_for_template(self.db, template.id, config, storage_dir=self.storage_dir)

        self.assertEqual(result.content_source, "storage")
        self.assertEqual(result.content_length, len("Hello {RECIPIENT}"))
        self.assertEqual([tag.text for tag in list_extracted_tags(self.db, template.id)], ["{RECIPIENT}"])

    def test_template_without_content_yields_zero_tags(self) -> None:
        template = self._create()

        result = run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

        self.assertEqual(result.content_source, "empty")
        self.assertEqual(result.tags_created, 0)
        self.assertEqual(list_extracted_tags(self.db, template.id), [])
        self.db.refresh(template)
        self.assertEqual(template.status, "completed")

    def test_pdf_needing_parsing_is_refused(self) -> None:
        template = self._create(
            metadata={
                "content": "%PDF-1.7 [CLIENT_NAME]",
                "needsDocumentParsing": True,
                "originalFileType": "application/pdf",
            }
        )

        with self.assertRaises(ContentUnavailableError):
            run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)
        self.db.refresh(template)
        self.assertEqual(template.status, "uploaded")

    def test_missing_storage_file_is_content_unavailable(self) -> None:
        template = self._create(file_path="missing.txt")

        with self.assertRaises(ContentUnavailableError):
            run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

    def test_storage_path_outside_directory_is_refused(self) -> None:
        template = self._create(file_path="../outside.txt")

        with self.assertRaises(ContentUnavailableError):
            run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

    def test_unknown_template_raises(self) -> None:
        with self.assertRaises(TemplateNotFoundError):
            run_extraction_for_template(self.db, "does-not-exist", storage_dir=self.storage_dir)

    def test_failed_write_is_rolled_back_and_reported(self) -> None:
        template = self._create(metadata={"content": "[KEEP_ME]"})
        run_extraction_for_template(self.db, template.id, storage_dir=self.storage_dir)

        with self.assertRaises(TagStorageError):
            run_extraction_for_template(
                self.db,
                template.id,
                extractor=_BrokenRowExtractor(),
                storage_dir=self.storage_dir,
            )

        self.assertEqual([tag.text for tag in list_extracted_tags(self.db, template.id)], ["[KEEP_ME]"])

    def test_injected_extractor_receives_content_and_config(self) -> None:
        template = self._create(metadata={"content": "anything"})
        extractor = _RecordingExtractor()
        config = resolve_config(case_sensitive=True)

        result = run_extraction_for_template(
            self.db,
            template.id,
            config,
            extractor=extractor,
            storage_dir=self.storage_dir,
        )

        self.assertEqual(extractor.calls, [("anything", config)])
        self.assertEqual(result.tags_created, 1)

    def test_preview_does_not_store(self) -> None:
        template = self._create(metadata={"content": "[CLIENT_NAME]"})

        results = preview_extraction("Contact @johnSmith, thanks")

        self.assertEqual([r.text for r in results], ["@johnSmith"])
        self.assertEqual(list_extracted_tags(self.db, template.id), [])

    def test_list_templates_returns_created_records(self) -> None:
        first = self._create(name="First")
        second = self._create(name="Second")

        ids = {template.id for template in list_templates(self.db)}

        self.assertEqual(ids, {first.id, second.id})
        self.assertEqual(first.uploaded_by, "uploader-1")
        self.assertEqual(first.status, "uploaded")


class TagMappingServiceTests(_DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.template = self._create(metadata={"content": "[CLIENT_NAME] [CONTRACT_DATE]"})
        run_extraction_for_template(self.db, self.template.id, storage_dir=self.storage_dir)

    def test_replace_and_list_mappings(self) -> None:
        replace_tag_mappings(
            self.db,
            self.template.id,
            [
                TagMappingInput(tag_text="[CLIENT_NAME]", field_name="client.full_name"),
                TagMappingInput(tag_text="[CONTRACT_DATE]", field_name="contract.signed_on"),
            ],
            user_id="mapper-1",
        )
        mappings = replace_tag_mappings(
            self.db,
            self.template.id,
            [
                TagMappingInput(tag_text="[CLIENT_NAME]", field_name="client.legal_name"),
                TagMappingInput(tag_text="[CLIENT_NAME]", field_name=" client.display_name "),
            ],
            user_id="mapper-2",
        )

        self.assertEqual(len(mappings), 1)
        self.assertEqual(mappings[0].field_name, "client.display_name")
        self.assertEqual(mappings[0].mapped_by, "mapper-2")
        self.assertEqual(
            [m.tag_text for m in list_tag_mappings(self.db, self.template.id)],
            ["[CLIENT_NAME]"],
        )

    def test_unknown_tag_is_rejected(self) -> None:
        with self.assertRaises(UnknownTagError):
            replace_tag_mappings(
                self.db,
                self.template.id,
                [TagMappingInput(tag_text="[NOT_THERE]", field_name="x")],
            )
        self.assertEqual(list_tag_mappings(self.db, self.template.id), [])

    def test_unknown_template_is_rejected(self) -> None:
        with self.assertRaises(TemplateNotFoundError):
            list_tag_mappings(self.db, "missing-template")

    def test_failed_mapping_write_is_rolled_back(self) -> None:
        replace_tag_mappings(
            self.db,
            self.template.id,
            [TagMappingInput(tag_text="[CLIENT_NAME]", field_name="client.full_name")],
        )

        failure = OperationalError("INSERT INTO tag_mappings", {}, Exception("disk full"))
        with mock.patch.object(self.db, "commit", side_effect=failure):
            with self.assertRaises(TagStorageError):
                replace_tag_mappings(
                    self.db,
                    self.template.id,
                    [TagMappingInput(tag_text="[CONTRACT_DATE]", field_name="contract.signed_on")],
                )

        mappings = list_tag_mappings(self.db, self.template.id)
        self.assertEqual(
            [(m.tag_text, m.field_name) for m in mappings],
            [("[CLIENT_NAME]", "client.full_name")],
        )

    def test_reextraction_drops_mappings_for_vanished_tags(self) -> None:
        replace_tag_mappings(
            self.db,
            self.template.id,
            [
                TagMappingInput(tag_text="[CLIENT_NAME]", field_name="client.full_name"),
                TagMappingInput(tag_text="[CONTRACT_DATE]", field_name="contract.signed_on"),
            ],
        )

        self.template.metadata_json = {"content": "Dear [CLIENT_NAME]"}
        self.db.commit()
        run_extraction_for_template(self.db, self.template.id, storage_dir=self.storage_dir)

        self.assertEqual(
            [m.tag_text for m in list_tag_mappings(self.db, self.template.id)],
            ["[CLIENT_NAME]"],
        )

    def test_reextraction_without_tags_drops_all_mappings(self) -> None:
        replace_tag_mappings(
            self.db,
            self.template.id,
            [TagMappingInput(tag_text="[CLIENT_NAME]", field_name="client.full_name")],
        )

        self.template.metadata_json = {"content": "No placeholders left."}
        self.db.commit()
        result = run_extraction_for_template(self.db, self.template.id, storage_dir=self.storage_dir)

        self.assertEqual(result.tags_created, 0)
        self.assertEqual(list_tag_mappings(self.db, self.template.id), [])


if __name__ == "__main__":
    unittest.main()
