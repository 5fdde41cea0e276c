"""CLI entrypoints for unit extraction."""
from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import typer
from pydantic import BaseModel, Field, ValidationError
from tqdm import tqdm

from ..config import ExtractorSettings, get_settings
from ..extraction.descriptors import ResultSet
from ..extraction.engine import UnitExtractor
from ..reporting.tables import results_to_frame, write_table
from ..utils.logging import configure_json_logger, flush_handlers, generate_trace_id, log_event

__all__ = ["DocumentRecord", "app"]

app = typer.Typer(help="Unit extraction utilities", add_completion=False)


class DocumentRecord(BaseModel):
    """One input document of a JSONL batch."""

    text_id: Optional[str] = Field(default=None, description="Identifier copied to the output")
    text: str = Field(..., description="Free text to scan for quantities")


def _build_extractor(settings: ExtractorSettings, primary: Optional[str], secondary: Optional[str]) -> UnitExtractor:
    overrides: Dict[str, Any] = {}
    if primary:
        overrides["primary_interpreter"] = primary.lower()
    if secondary:
        overrides["secondary_interpreter"] = None if secondary.lower() == "none" else secondary.lower()
    resolved = replace(settings, **overrides)
    try:
        return UnitExtractor.from_settings(resolved)
    except KeyError as exc:
        typer.echo(str(exc.args[0]), err=True)
        raise typer.Exit(code=2) from exc


def _sorted_payload(results: ResultSet) -> List[Dict[str, Optional[str]]]:
    return [descriptor.as_dict() for descriptor in sorted(results, key=lambda item: item.row())]


@app.command("text")
def extract_text(
    text: str = typer.Argument(..., help="Text to scan"),
    output_format: str = typer.Option("json", "--format", help="Output format: json or table"),
    primary: Optional[str] = typer.Option(None, "--primary", help="Primary unit interpreter"),
    secondary: Optional[str] = typer.Option(None, "--secondary", help="Secondary unit interpreter or 'none'"),
) -> None:
    """Print the units found in a single string."""

    extractor = _build_extractor(get_settings(), primary, secondary)
    results = extractor.find_units(text)

    fmt = output_format.lower()
    if fmt == "json":
        typer.echo(json.dumps(_sorted_payload(results), indent=2, ensure_ascii=False))
    elif fmt == "table":
        frame = results_to_frame(results)
        typer.echo(frame.to_string(index=False) if not frame.empty else "no units found")
    else:
        typer.echo(f"Unsupported format '{output_format}'", err=True)
        raise typer.Exit(code=2)


def _read_records(input_path: Path, text_field: str, id_field: str) -> List[Tuple[int, Any]]:
    """Return ``(line_number, record_or_error)`` for every non-empty line."""

    records: List[Tuple[int, Any]] = []
    with input_path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                raw = json.loads(line)
                if not isinstance(raw, dict):
                    raise ValueError("record is not a JSON object")
                identifier = raw.get(id_field)
                record = DocumentRecord(
                    text_id=str(identifier) if identifier is not None else None,
                    text=raw.get(text_field),
                )
            except (ValueError, ValidationError) as exc:
                records.append((line_number, exc))
                continue
            records.append((line_number, record))
    return records


@app.command("file")
def extract_file(
    input_path: Path = typer.Option(..., "--input", exists=True, dir_okay=False, help="JSONL with input records"),
    output_path: Path = typer.Option(
        ..., "--output", dir_okay=False, help="Destination file (.jsonl, .csv or .tsv)"
    ),
    text_field: str = typer.Option("text", "--text-field", help="Record field holding the text"),
    id_field: str = typer.Option("text_id", "--id-field", help="Record field holding the identifier"),
    primary: Optional[str] = typer.Option(None, "--primary", help="Primary unit interpreter"),
    secondary: Optional[str] = typer.Option(None, "--secondary", help="Secondary unit interpreter or 'none'"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", dir_okay=False, help="JSONL log destination"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first malformed record"),
) -> None:
    """Scan every record of a JSONL file and write the units found."""

    suffix = output_path.suffix.lower()
    if suffix not in {".jsonl", ".csv", ".tsv"}:
        typer.echo(f"Unsupported output format '{output_path.suffix}'", err=True)
        raise typer.Exit(code=2)

    settings = get_settings()
    logger = configure_json_logger(log_file or settings.log_path, level=settings.log_level_value)
    trace_id = log_event(logger, "extract.units.start", input=str(input_path), output=str(output_path))

    extractor = _build_extractor(settings, primary, secondary)
    records = _read_records(input_path, text_field, id_field)

    outputs: List[Tuple[Optional[str], ResultSet]] = []
    failures = 0
    with tqdm(total=len(records), desc="Extracting units", unit="doc") as pbar:
        for line_number, record in records:
            if isinstance(record, Exception):
                failures += 1
                log_event(
                    logger,
                    "extract.units.invalid_record",
                    trace_id=trace_id,
                    line=line_number,
                    error=str(record),
                )
                if fail_fast:
                    flush_handlers(logger)
                    raise typer.BadParameter(f"line {line_number}: {record}", param_hint="--input")
                typer.echo(f"Skipping line {line_number}: {record}", err=True)
                pbar.update(1)
                continue
            text_id = record.text_id or str(line_number)
            outputs.append((text_id, extractor.find_units(record.text)))
            pbar.update(1)

    if suffix == ".jsonl":
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as handle:
            for text_id, results in outputs:
                payload = {"text_id": text_id, "units": _sorted_payload(results)}
                handle.write(json.dumps(payload, ensure_ascii=False) + "\n")
    else:
        frames = [results_to_frame(results, text_id=text_id) for text_id, results in outputs]
        frame = pd.concat(frames, ignore_index=True) if frames else results_to_frame([], text_id="")
        write_table(frame, output_path)

    units = sum(len(results) for _, results in outputs)
    log_event(
        logger,
        "extract.units.completed",
        trace_id=trace_id,
        documents=len(outputs),
        invalid=failures,
        units=units,
    )
    flush_handlers(logger)
    typer.echo(
        json.dumps(
            {"status": "completed", "documents": len(outputs), "invalid": failures, "units": units, "output": str(output_path)},
            ensure_ascii=False,
        )
    )
