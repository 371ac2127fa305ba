"""
biasdetector — score an article from the command line.

Usage:
    biasdetector --example                         # Score the sample article
    biasdetector article.json                      # {"title": ..., "content": ..., "source": ...}
    biasdetector --title T --content-file body.txt --source https://apnews.com/x
    biasdetector --title T --content "Article text..."
    biasdetector article.json --json               # Machine-readable output
    biasdetector article.json --offline            # Skip enrichment services
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from biasdetector.config import settings
from biasdetector.engine import ScoringEngine
from biasdetector.enrichment.factory import get_provider
from biasdetector.gateway import EnrichmentGateway
from biasdetector.logging import setup_logging
from biasdetector.models import AnalysisResult, Article, example_article
from biasdetector.schemas.analysis import AnalysisResponse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biasdetector",
        description="Score a news article for bias, factual accuracy and source reliability",
    )
    parser.add_argument(
        "article",
        nargs="?",
        help="Path to a JSON file with title, content and optional source/author/date",
    )
    parser.add_argument("--example", action="store_true", help="Score the sample article")
    parser.add_argument("--title", default="", help="Article title")
    parser.add_argument("--content", help="Article body as a string")
    parser.add_argument("--content-file", help="Path to a plain-text file with the article body")
    parser.add_argument("--source", help="Source URL")
    parser.add_argument("--author", help="Author name")
    parser.add_argument("--date", help="Publication date")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON only (for scripting)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the enrichment services (text-only scoring)",
    )
    return parser


def load_article(args: argparse.Namespace) -> Article:
    """Build the Article from CLI arguments. Raises ValueError on bad input."""
    if args.example:
        return example_article()

    if args.article:
        data = json.loads(Path(args.article).read_text(encoding="utf-8"))
        if not isinstance(data, dict) or "content" not in data:
            raise ValueError(f"{args.article}: expected an object with at least 'content'")
        return Article(
            title=data.get("title", ""),
            content=data["content"],
            source=data.get("source"),
            author=data.get("author"),
            date=data.get("date"),
        )

    if args.content is not None or args.content_file:
        if args.content is not None:
            content = args.content
        else:
            content = Path(args.content_file).read_text(encoding="utf-8")
        return Article(
            title=args.title,
            content=content,
            source=args.source,
            author=args.author,
            date=args.date,
        )

    raise ValueError("Provide an article file, --content, --content-file, or --example")


def format_report(result: AnalysisResult) -> str:
    lines = [
        "=" * 60,
        "ARTICLE CREDIBILITY REPORT",
        "=" * 60,
        "",
        result.summary,
        "",
        f"Overall bias score:     {result.overall_bias_score:.2f}",
        f"Overall factual score:  {result.overall_factual_score:.2f}",
    ]
    if result.biases:
        lines += ["", "Bias findings:"]
        for b in result.biases:
            lines.append(f"  - {b.category} ({b.score:.2f}): {b.explanation}")
    lines += ["", "Fact checks:"]
    for f in result.fact_check:
        mark = "ok" if f.is_factual else "??"
        lines.append(f"  [{mark}] ({f.confidence:.2f}) {f.explanation}")
    return "\n".join(lines)


async def _run(article: Article, offline: bool) -> AnalysisResult:
    provider = None if offline else get_provider(settings.ENRICHMENT_PROVIDER)
    engine = ScoringEngine(
        gateway=EnrichmentGateway(provider=provider, timeout=settings.ENRICHMENT_TIMEOUT),
    )
    try:
        return await engine.score(article)
    finally:
        await engine.aclose()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(fmt="text", level="WARNING", stream=sys.stderr)

    try:
        article = load_article(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = asyncio.run(_run(article, args.offline))

    if args.json:
        payload = AnalysisResponse.from_result(result).model_dump(by_alias=True)
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
