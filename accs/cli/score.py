"""
Score CLI Commands

Commands for scoring content items from JSON input files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml
from tqdm import tqdm

from ..core.config import load_industry_trends
from ..scoring.synthesizer import compute_accs, score_batch


logger = logging.getLogger(__name__)


@click.group(name="score")
def score_group():
    """Score content items with the ACCS engine."""
    pass


@score_group.command(name="run")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Write results JSON here instead of stdout")
@click.option("--trends", "trends_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML industry trend table applied to items without their own")
@click.option("--as-of", "as_of", help="ISO-8601 reference time for the promotion window")
@click.option("--period-days", type=click.IntRange(min=1), help="Promotion lookback window in days")
@click.option("--verbose", is_flag=True, help="Show per-item errors")
def score_run(
    input_path: Path,
    output_path: Optional[Path],
    trends_path: Optional[Path],
    as_of: Optional[str],
    period_days: Optional[int],
    verbose: bool,
):
    """
    Score one item or a list of items from a JSON file.

    Example:
        accs score run items.json --as-of 2026-10-01T00:00:00Z --output scores.json
    """
    with open(input_path, 'r') as f:
        data = json.load(f)

    payloads = data if isinstance(data, list) else [data]
    if not all(isinstance(p, dict) for p in payloads):
        raise click.BadParameter("input must be a JSON object or a list of objects", param_hint="INPUT_PATH")

    if as_of:
        try:
            datetime.fromisoformat(as_of.replace("Z", "+00:00"))
        except ValueError:
            raise click.BadParameter(f"not an ISO-8601 datetime: {as_of}", param_hint="--as-of")

    trends = None
    if trends_path:
        try:
            trends = load_industry_trends(trends_path)
        except (ValueError, yaml.YAMLError) as e:
            raise click.BadParameter(str(e), param_hint="--trends")

    payloads = [_apply_defaults(p, trends, as_of) for p in payloads]

    click.echo(f"📈 Scoring {len(payloads)} item(s)", err=True)

    batch = score_batch(
        tqdm(payloads, desc="Scoring content", disable=len(payloads) < 2),
        period_days=period_days,
    )

    results = [
        {"contentItemId": content_id, "accs": score.model_dump(by_alias=True, mode="json")}
        for content_id, score in batch.scored
    ]
    output = json.dumps(results, indent=2)

    if output_path:
        output_path.write_text(output)
        click.echo(f"✨ Results written to {output_path}", err=True)
    else:
        click.echo(output)

    # Show summary
    click.echo(f"\n{'='*60}", err=True)
    click.echo("📊 SCORING SUMMARY", err=True)
    click.echo(f"{'='*60}", err=True)
    click.echo(f"✅ Completed: {batch.completed}", err=True)
    click.echo(f"❌ Failed: {batch.failed}", err=True)

    if batch.errors and verbose:
        click.echo("\n⚠️  ERRORS:", err=True)
        for err in batch.errors:
            click.echo(f"  - [{err['index']}] {err['content_item_id']}: {err['error'][:200]}", err=True)

    if batch.completed == 0:
        raise SystemExit(1)


@score_group.command(name="baseline")
def score_baseline():
    """Print the score for an item with no signals at all."""
    result = compute_accs({"contentItemId": "baseline"})
    click.echo(json.dumps(result.model_dump(by_alias=True, mode="json"), indent=2))


def _apply_defaults(
    payload: Dict[str, Any],
    trends: Optional[List[Dict[str, Any]]],
    as_of: Optional[str],
) -> Dict[str, Any]:
    """Fill industry trends and reference time where the item has none."""
    payload = dict(payload)
    if trends is not None and not (payload.get("industryTrends") or payload.get("industry_trends")):
        payload["industryTrends"] = trends
    if as_of and not (payload.get("asOf") or payload.get("as_of")):
        payload["asOf"] = as_of
    return payload
