"""Command-line entry point.

Usage::

    compute-embeddings dataset --documents-style point-list --semantic-api local \\
        name description brand categories < products.json > points.json
    compute-embeddings query --semantic-api remote "red running shoes"

``dataset`` reads a JSON array of objects from stdin and prints the
embedded documents as pretty JSON. ``query`` prints the vector of one
string as a compact JSON array. Logs and the progress bar go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import IO, Any

from pydantic import ValidationError

from compute_embeddings.config import Settings, get_settings
from compute_embeddings.embeddings import SemanticApi, build_backend
from compute_embeddings.errors import ComputeEmbeddingsError, EmbeddingError
from compute_embeddings.ingestion import embed_documents, load_documents
from compute_embeddings.output import DocumentStyle, get_encoder

logger = logging.getLogger("compute_embeddings")


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {raw}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compute-embeddings",
        description="Compute embeddings of JSON documents for Meilisearch or Qdrant.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_help = "The API used to compute the embeddings (remote|local, or openai|all-mini-lm-l6-v2)."

    dataset = subparsers.add_parser("dataset", help="Embed a JSON array of documents read from stdin.")
    dataset.add_argument(
        "--documents-style",
        type=DocumentStyle.parse,
        required=True,
        help="The style of the output documents (augmented-document|point-list, or meilisearch|qdrant).",
    )
    dataset.add_argument(
        "--batched-documents",
        type=_positive_int,
        default=None,
        help="Number of documents processed at the same time (default: BATCH_SIZE, 4).",
    )
    dataset.add_argument("--semantic-api", type=SemanticApi.parse, required=True, help=api_help)
    dataset.add_argument("--no-progress", action="store_true", help="Do not render the progress bar.")
    dataset.add_argument(
        "documents_fields",
        nargs="*",
        metavar="FIELD",
        help="The fields to concatenate in this specific order to generate the embeddings.",
    )

    query = subparsers.add_parser("query", help="Embed a single query string.")
    query.add_argument("--semantic-api", type=SemanticApi.parse, required=True, help=api_help)
    query.add_argument("query", help="Generate the embeddings of this query.")

    return parser


def run_dataset(args: argparse.Namespace, config: Settings, stdin: IO[str], stdout: IO[str]) -> None:
    with build_backend(args.semantic_api, config) as backend:
        documents = load_documents(stdin)

        embedded = embed_documents(
            documents,
            args.documents_fields,
            backend,
            batch_size=args.batched_documents or config.batch_size,
            show_progress=not args.no_progress,
        )
    output: Any = get_encoder(args.documents_style).render(embedded)

    stdout.write(_dumps(output, indent=2, ensure_ascii=False))
    stdout.write("\n")


def run_query(args: argparse.Namespace, config: Settings, stdout: IO[str]) -> None:
    with build_backend(args.semantic_api, config) as backend:
        started = time.monotonic()
        vector = backend.encode_query(args.query)
        logger.info("It took %.2fs to encode the query.", time.monotonic() - started)

    stdout.write(_dumps(vector, separators=(",", ":")))
    stdout.write("\n")


def _dumps(value: Any, **kwargs: Any) -> str:
    # Serialized in full before writing so a failure leaves stdout empty.
    try:
        return json.dumps(value, allow_nan=False, **kwargs)
    except ValueError as exc:
        raise EmbeddingError(f"Cannot serialize the output as JSON: {exc}") from exc


def main(argv: list[str] | None = None, *, stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    try:
        if args.command == "dataset":
            run_dataset(args, config, stdin, stdout)
        else:
            run_query(args, config, stdout)
    except ComputeEmbeddingsError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
