import argparse
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from capacity_artifacts.documents.pipeline import render_artifact
from capacity_artifacts.documents.variants import AnonymizedCohort, SingleSubject
from capacity_artifacts.dynamic.compute import compute_dynamic_data
from capacity_artifacts.dynamic.format import format_dynamic_data, to_subject_record
from capacity_artifacts.dynamic.models import CapacityLog, ComputeConfig
from capacity_artifacts.dynamic.projection import compute_projection
from capacity_artifacts.dynamic.summary import generate_summary
from capacity_artifacts.exceptions import CapacityArtifactError
from capacity_artifacts.export.json_artifact import (
    create_artifact_json,
    serialize_artifact_json,
    summary_from_dynamic,
)
from capacity_artifacts.models.capacity import Scale, SubjectRecord, ZoneBand
from capacity_artifacts.reference.fixtures import AVATAR_COLORS
from capacity_artifacts.reference.golden import (
    reference_cohort_document,
    reference_group_document,
    reference_json_document,
    reference_single_document,
)
from capacity_artifacts.utils.config import config
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)


def _parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


# ------------------------------------------------------------
# Input loading
# ------------------------------------------------------------
def load_subjects(path: Path, scale: Scale) -> List[SubjectRecord]:
    """
    CSV columns: subject_id,value[,color]. One row per day per subject,
    chronological within each subject. Subjects keep first-seen order.
    """
    df = pd.read_csv(path, dtype={"subject_id": str})
    missing = {"subject_id", "value"} - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing column(s): {', '.join(sorted(missing))}")

    subjects = []
    for i, (subject_id, rows) in enumerate(df.groupby("subject_id", sort=False)):
        color = AVATAR_COLORS[i % len(AVATAR_COLORS)]
        if "color" in rows.columns and rows["color"].notna().any():
            color = str(rows["color"].dropna().iloc[0])
        subjects.append(SubjectRecord(
            subject_id=subject_id,
            color_token=color,
            series=tuple(rows["value"].astype(float)),
            scale=scale,
        ))

    logger.info("Loaded %d subject(s) from %s", len(subjects), path)
    return subjects


def load_checkins(path: Path) -> List[CapacityLog]:
    """CSV columns: local_date (YYYY-MM-DD),state (resourced/stretched/depleted)."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = {"local_date", "state"} - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing column(s): {', '.join(sorted(missing))}")

    logs = []
    for line, row in enumerate(df.itertuples(index=False), start=2):
        state = row.state.strip().lower()
        if not state:
            raise ValueError(f"{path}:{line} has no state")
        logs.append(CapacityLog(local_date=_parse_date(row.local_date.strip()), state=ZoneBand(state)))

    logger.info("Loaded %d check-in(s) from %s", len(logs), path)
    return logs


# ------------------------------------------------------------
# Commands
# ------------------------------------------------------------
def _reference_document(args) -> str:
    if args.reference == "single":
        return reference_single_document()
    if args.reference == "group":
        return reference_group_document()
    return reference_cohort_document(args.seats)


def _input_document(args) -> str:
    subjects = load_subjects(Path(args.input), Scale(args.scale))

    if args.variant == "single":
        if len(subjects) != 1:
            raise ValueError(f"--variant single needs exactly one subject, found {len(subjects)}")
        variant = SingleSubject(record=subjects[0])
    else:
        variant = AnonymizedCohort(subjects=tuple(subjects), cohort_id=args.cohort_id)

    overrides = {
        "protocol": config.DEFAULT_PROTOCOL,
        "observation_start": _parse_date(args.window_start).isoformat(),
        "observation_end": _parse_date(args.window_end).isoformat(),
    }
    return render_artifact(variant, None, overrides).document


def _checkin_document(args) -> Tuple[str, str]:
    """HTML document plus its JSON companion, sharing one stamp."""
    compute_config = ComputeConfig(
        window_start=_parse_date(args.window_start),
        window_end=_parse_date(args.window_end),
        minimum_days=args.minimum_days,
        subject_id_seed=args.seed,
    )
    logs = load_checkins(Path(args.checkins))
    data = compute_dynamic_data(logs, compute_config)
    stamped = render_artifact(SingleSubject(record=to_subject_record(data)), format_dynamic_data(data))

    summary = generate_summary(data, compute_projection(logs, data.observation_end))
    artifact = create_artifact_json(stamped.metadata, summary_from_dynamic(data, summary.summary))
    return stamped.document, serialize_artifact_json(artifact)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render deterministic capacity artifacts (HTML, optional PDF)"
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--reference",
        choices=["single", "group", "cohort"],
        help="Render a frozen reference document",
    )
    source.add_argument(
        "--input",
        help="CSV of subject_id,value[,color] rows",
    )
    source.add_argument(
        "--checkins",
        help="CSV of local_date,state check-ins (single subject, computed narrative)",
    )

    parser.add_argument("--seats", type=int, default=10, help="Cohort size for --reference cohort")
    parser.add_argument("--variant", choices=["single", "cohort"], default="single")
    parser.add_argument("--scale", choices=[s.value for s in Scale], default=Scale.PERCENT.value)
    parser.add_argument("--cohort-id", default="COHORT", help="Cohort label printed in the header")

    parser.add_argument("--window-start", default="2025-10-01", help="Observation window, YYYY-MM-DD")
    parser.add_argument("--window-end", default="2025-12-31", help="Observation window, YYYY-MM-DD")
    parser.add_argument("--minimum-days", type=int, default=90)
    parser.add_argument("--seed", default="default", help="Seed for the anonymized subject id")

    parser.add_argument("--output", default=None, help="HTML output path (defaults to OUTPUT_DIR)")
    parser.add_argument("--pdf", action="store_true", help="Also print the document to PDF")
    parser.add_argument("--json", action="store_true", help="Also write the JSON companion (--checkins, --reference single)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.json and not (args.checkins or args.reference == "single"):
        build_parser().error("--json needs --checkins or --reference single")

    companion = None
    try:
        if args.reference:
            name = f"reference_{args.reference}"
            document = _reference_document(args)
            if args.json:
                companion = reference_json_document()
        elif args.input:
            name = f"{Path(args.input).stem}_{args.variant}"
            document = _input_document(args)
        else:
            name = f"{Path(args.checkins).stem}_narrative"
            document, companion = _checkin_document(args)
    except (CapacityArtifactError, ValueError) as e:
        logger.error("Artifact rendering failed: %s", e, exc_info=True)
        raise SystemExit(f"error: {e}") from e

    output = Path(args.output) if args.output else config.output_path(f"{name}.html")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8", newline="\n")
    logger.info("HTML written: %s", output)
    print(output)

    if args.json:
        json_path = output.with_suffix(".json")
        json_path.write_text(companion, encoding="utf-8", newline="\n")
        logger.info("JSON written: %s", json_path)
        print(json_path)

    if args.pdf:
        # Imported here so HTML-only runs never touch the print stack
        from capacity_artifacts.export.print_renderer import render_pdf

        try:
            pdf_path = render_pdf(document, output.with_suffix(".pdf"))
        except CapacityArtifactError as e:
            raise SystemExit(f"error: {e}") from e
        print(pdf_path)


if __name__ == "__main__":
    main()
