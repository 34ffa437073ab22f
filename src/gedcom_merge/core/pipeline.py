from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from gedcom_merge.append.builder import AppendResult, append_people
from gedcom_merge.append.session import InputSource, collect_request
from gedcom_merge.core.context import MergeContext
from gedcom_merge.core.exceptions import GedcomMergeError, MissingInput, WriteFailure
from gedcom_merge.loader.tokenizer import read_text
from gedcom_merge.merge.assembler import prepare_master
from gedcom_merge.merge.merger import MergeResult, ged_today, merge_into


class MergeState(str, Enum):
    LOAD_MASTER = "LoadMaster"
    ENSURE_WELL_FORMED = "EnsureWellFormed"
    LOAD_INCOMING = "LoadIncoming"
    VALIDATE_NON_EMPTY = "ValidateNonEmpty"
    TOKENIZE = "Tokenize"
    CLASSIFY = "Classify"
    ALLOCATE = "Allocate"
    REMAP_AND_CITE = "RemapAndCite"
    ASSEMBLE = "Assemble"
    PERSIST = "Persist"
    REPORT = "Report"
    FAILED = "Failed"


class AppendState(str, Enum):
    LOAD_MASTER = "LoadMaster"
    ENSURE_WELL_FORMED = "EnsureWellFormed"
    PROMPT = "Prompt"
    BUILD = "Build"
    PERSIST = "Persist"
    REPORT = "Report"
    FAILED = "Failed"


# ---------------------------------------------------------
# File boundary
# ---------------------------------------------------------
def read_master(path: Path) -> str:
    """Master text, or "" when the file does not exist yet."""
    if not path.exists():
        return ""
    try:
        return read_text(path)
    except OSError as exc:
        raise GedcomMergeError(f"Master file is not readable: {path}") from exc


def read_incoming(path: Optional[Path]) -> str:
    if path is None or not path.is_file():
        raise MissingInput(f"Import file is empty or not found: {path}")
    try:
        return read_text(path)
    except OSError as exc:
        raise MissingInput(f"Import file is not readable: {path}") from exc


def write_master(path: Path, text: str) -> None:
    """
    Replace the master in one step: write a sibling temp file, then rename
    it over the original.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        if tmp.exists():
            tmp.unlink()
        raise WriteFailure(f"Cannot write master file {path}: {exc}") from exc


class _StatefulPipeline:
    def __init__(self, context: MergeContext):
        self.ctx = context
        self.log = context.logger

    def _enter(self, state: Enum) -> None:
        self.ctx.state = state.value
        self.log.debug(f"State -> {state.value}")

    def _fail(self, exc: Exception, failed_state: Enum) -> None:
        at = self.ctx.state
        self.ctx.errors.append(f"{at}: {exc}")
        self.ctx.state = failed_state.value
        self.log.error(f"Pipeline failed in {at}: {exc}")


class MergePipeline(_StatefulPipeline):
    """
    Merges one incoming GEDCOM file into the master file.

    The master is written once, after the merged document is complete.
    """

    def run(self) -> MergeResult:
        ctx = self.ctx
        self.log.info(f"Merge pipeline starting: {ctx.input_path} -> {ctx.master_path}")

        try:
            self._enter(MergeState.LOAD_MASTER)
            master = read_master(ctx.master_path)

            self._enter(MergeState.ENSURE_WELL_FORMED)
            base = prepare_master(master, ged_today(ctx.today), ctx.config)

            self._enter(MergeState.LOAD_INCOMING)
            incoming = read_incoming(ctx.input_path)

            self._enter(MergeState.VALIDATE_NON_EMPTY)
            if not incoming.strip():
                raise MissingInput(f"Import file is empty or not found: {ctx.input_path}")

            result = merge_into(
                base,
                incoming,
                ctx.add_citations,
                ctx.config.citation_scope,
                on_step=lambda name: self._enter(MergeState(name)),
            )
            ctx.stats["incoming"] = result.incoming

            self._enter(MergeState.PERSIST)
            write_master(ctx.master_path, result.text)

            self._enter(MergeState.REPORT)
            ctx.stats["counters"] = result.counters
            ctx.stats["imported"] = result.imported
            self.log.info(f"Merged into {ctx.master_path}; now up to {result.counters.describe()}")

            return result

        except GedcomMergeError as exc:
            self._fail(exc, MergeState.FAILED)
            raise
        except Exception as exc:
            self._fail(exc, MergeState.FAILED)
            self.log.exception("Merge pipeline execution failed")
            raise GedcomMergeError(str(exc)) from exc


class AppendPipeline(_StatefulPipeline):
    """
    Prompts for a person (and optional spouse) and appends the new records
    to the master file.
    """

    def __init__(self, context: MergeContext, source: InputSource):
        super().__init__(context)
        self.source = source

    def run(self) -> AppendResult:
        ctx = self.ctx
        self.log.info(f"Append pipeline starting: {ctx.master_path}")

        try:
            self._enter(AppendState.LOAD_MASTER)
            master = read_master(ctx.master_path)

            self._enter(AppendState.ENSURE_WELL_FORMED)
            stamp = ged_today(ctx.today)
            base = prepare_master(master, stamp, ctx.config)

            self._enter(AppendState.PROMPT)
            request = collect_request(self.source)

            self._enter(AppendState.BUILD)
            result = append_people(base, request, today=stamp, config=ctx.config)

            self._enter(AppendState.PERSIST)
            write_master(ctx.master_path, result.text)

            self._enter(AppendState.REPORT)
            ctx.stats["counters"] = result.counters
            self.log.info(
                f"Saved updates to {ctx.master_path}; now up to {result.counters.describe()}"
            )
            return result

        except GedcomMergeError as exc:
            self._fail(exc, AppendState.FAILED)
            raise
        except Exception as exc:
            self._fail(exc, AppendState.FAILED)
            self.log.exception("Append pipeline execution failed")
            raise GedcomMergeError(str(exc)) from exc
