"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


SAMPLE_TYPESCRIPT = '''// Service module
import { User } from './models/user';
const fs = require("fs");

/**
 * Greets a user.
 */
export function greet(name: string): string {
    return `Hello, ${name}!`;
}

export const GREETING = "hi there"; // default greeting

const headers = { "Content-Type": 'application/json', accept: "*/*" };

type Method = "GET" | "POST";

async function fetchData(url: string): Promise<any> {
    const response = await fetch(url, { method: "GET" });
    return response.json();
}
'''


@pytest.fixture
def sample_typescript_source() -> str:
    """Sample TypeScript source with literals, templates, and comments."""
    return SAMPLE_TYPESCRIPT


@pytest.fixture
def sample_typescript_file(temp_dir: Path) -> Path:
    """Create a sample TypeScript file for testing."""
    filepath = temp_dir / "sample.ts"
    filepath.write_text(SAMPLE_TYPESCRIPT, encoding="utf-8")
    return filepath
