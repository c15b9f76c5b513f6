# pipelines/answer_query.py
import argparse
import json
import logging
from typing import Any
from domain.models import QueryResult
from pipelines.sanitize_universe import sanitize_universe
from retrieval.keyword_matcher import match_universe
from reasoning.answer_builder import build_answer, render_match_lines

logger = logging.getLogger(__name__)

def answer_query(question: Any, raw_universe: Any) -> QueryResult:
    """sanitize -> match -> answer. Total: any question / JSON value gives a result."""
    if not isinstance(question, str):
        logger.debug(f"Question is not a string ({type(question).__name__}); treated as empty")
        question = ""
    universe = sanitize_universe(raw_universe)
    matches = match_universe(universe, question)
    return QueryResult(answer=build_answer(matches), matches=matches)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Ask a question about a universe JSON file.")
    parser.add_argument("universe", help="path to the universe JSON export")
    parser.add_argument("question")
    parser.add_argument("--panels", action="store_true", help="print the result panels instead of the raw matches")
    args = parser.parse_args(argv)

    with open(args.universe, encoding="utf-8") as f:
        raw = json.load(f)

    result = answer_query(args.question, raw)
    out = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if args.panels:
        out = {
            "answer": result.answer,
            "panels": [p.model_dump(mode="json", exclude_none=True) for p in render_match_lines(result.matches)],
        }
    print(json.dumps(out, ensure_ascii=False, indent=2))

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
