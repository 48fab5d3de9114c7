"""Tests for record persistence."""

import json
import logging

import pytest
import pytest_asyncio

from services.resume_analyzer import analyze
from services.resume_store import InMemoryResumeStore, persist_record


@pytest_asyncio.fixture
async def record(make_pipeline, sample_resume, valid_payload):
    pipeline, _ = make_pipeline([json.dumps(valid_payload)])
    response = await analyze(sample_resume, pipeline=pipeline)
    return response.record


@pytest.mark.asyncio
async def test_insert_and_get(record):
    store = InMemoryResumeStore()
    resume_id = await store.insert(record)
    assert resume_id == record.resume_id
    assert await store.get(resume_id) == record
    assert len(store) == 1


@pytest.mark.asyncio
async def test_persist_record_contains_store_errors(record, caplog):
    store = InMemoryResumeStore()
    await persist_record(store, record)
    with caplog.at_level(logging.ERROR):
        await persist_record(store, record)
    assert len(store) == 1
    assert "Failed to persist" in caplog.text


class _UnreachableStore:
    async def insert(self, record):
        raise ConnectionError("database unreachable")

    async def get(self, resume_id):
        return None


@pytest.mark.asyncio
async def test_persist_record_contains_unexpected_store_failures(record, caplog):
    with caplog.at_level(logging.ERROR):
        await persist_record(_UnreachableStore(), record)
    assert "Unexpected store failure" in caplog.text
    assert "database unreachable" in caplog.text
