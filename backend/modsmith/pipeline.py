"""
Content Pipeline - Orchestrates the complete compilation flow

This module wires together all pipeline stages:
Understanding → Clarification Gate → Interpreter → Validator → Expander →
(Planner | Accountant | Texture Synthesizer) → Materializer → Output Validator

Usage:
    pipeline = ContentPipeline(job_id="job123", seed="demo")
    result = pipeline.run("Smelt Raw Tin into Tin Ingot.")
    if result.status == PipelineStatus.COMPLETED:
        pipeline.write(result)
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from config import DEFAULT_TEXTURE_SEED, GENERATED_DIR, RASTERIZE_TEXTURES, TEXTURE_SIZE

from modsmith.schemas import (
    AggregatedExecutionPlan,
    ContentSpec,
    ExecutionPlan,
    ExpandedSpec,
    FinalTexturePlan,
    IntentCategory,
    MaterializedFile,
    PromptAnalysis,
    RequestSummary,
    ScopeBudgetResult,
    UserIntent,
)
from modsmith.interpretation import ClarificationGate, IntentInterpreter, PromptUnderstanding
from modsmith.core import (
    ExecutionPlanner,
    ScopeAccountant,
    SpecExpander,
    SpecManager,
    SpecValidator,
    aggregate_execution_plans,
    build_request_summary,
    validate_materialized_files,
)
from modsmith.texture import TextureSynthesizer
from modsmith.materializer import Materializer, plan_textures, texture_seed, write_materialized_files

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Raised when pipeline execution fails for a reason other than clarification or rejection"""
    pass


class PipelineStatus(str, Enum):
    """The three user-visible outcomes"""
    CLARIFICATION = "clarification"
    REJECTED = "rejected"
    COMPLETED = "completed"


class PipelineResult(BaseModel):
    """Outcome of one pipeline run"""
    status: PipelineStatus
    job_id: str
    analysis: Optional[PromptAnalysis] = None

    # Clarification
    message: Optional[str] = None
    examples: List[str] = Field(default_factory=list)

    # Rejection
    reason: Optional[str] = None
    gate: Optional[str] = None

    # Completion
    spec: Optional[ContentSpec] = None
    expanded: Optional[ExpandedSpec] = None
    plans: List[ExecutionPlan] = Field(default_factory=list)
    aggregated_plan: Optional[AggregatedExecutionPlan] = None
    scope: Optional[ScopeBudgetResult] = None
    texture_plans: List[FinalTexturePlan] = Field(default_factory=list)
    files: List[MaterializedFile] = Field(default_factory=list)
    summary: Optional[RequestSummary] = None

    execution_log: List[str] = Field(default_factory=list)


def spec_intents(spec: ContentSpec) -> List[Tuple[str, UserIntent]]:
    """
    (content id, intent) pairs for every declared entity

    Each wood type is priced and planned as one block intent; its derived
    family members carry no behavior of their own.
    """
    intents: List[Tuple[str, UserIntent]] = []
    for item in spec.items:
        intents.append((item.id, UserIntent(name=item.name, description=item.description, category=IntentCategory.ITEM)))
    for block in spec.blocks:
        intents.append((block.id, UserIntent(name=block.name, description=block.description, category=IntentCategory.BLOCK)))
    for wood in spec.wood_types:
        intents.append((f"{wood.id}_planks", UserIntent(name=f"{wood.display_name} Wood", category=IntentCategory.BLOCK)))
    return intents


class ContentPipeline:
    """
    Complete content compilation pipeline

    Every stage is a synchronous function over its inputs; the only randomness
    is the seeded hash, so identical (prompt, seed) pairs give identical results.
    """

    def __init__(
        self,
        job_id: str,
        output_dir: Optional[Path] = None,
        seed: Optional[str] = None,
        budget: Optional[int] = None,
        block_only: bool = False,
        rasterize: bool = RASTERIZE_TEXTURES,
        texture_size: int = TEXTURE_SIZE,
    ):
        """
        Initialize pipeline

        Args:
            job_id: Unique job identifier
            output_dir: Output tree root (defaults to GENERATED_DIR/job_id)
            seed: Texture seed (defaults to DEFAULT_TEXTURE_SEED)
            budget: Comparison credit budget; one of the credit tiers
            block_only: Request is for a functional block
            rasterize: Rasterize textures to PNG instead of emitting plan sidecars
            texture_size: Rasterization size (16 or 32)
        """
        self.job_id = job_id
        self.output_dir = Path(output_dir) if output_dir else GENERATED_DIR / job_id
        self.seed = seed or DEFAULT_TEXTURE_SEED
        self.block_only = block_only
        self.rasterize = rasterize

        # Initialize components
        self.understanding = PromptUnderstanding()
        self.gate = ClarificationGate()
        self.interpreter = IntentInterpreter(self.understanding, self.gate)
        self.validator = SpecValidator()
        self.expander = SpecExpander()
        self.planner = ExecutionPlanner()
        self.accountant = ScopeAccountant(budget)
        self.synthesizer = TextureSynthesizer(texture_size)
        self.materializer = Materializer(seed=self.seed, texture_size=texture_size, synthesizer=self.synthesizer)

        # Execution log
        self.execution_log: List[str] = []

    def run(
        self,
        prompt: Optional[str],
        progress_callback: Optional[Callable[[str], None]] = None,
    ) -> PipelineResult:
        """
        Compile a request

        Args:
            prompt: Request text
            progress_callback: Optional callback for progress updates (msg: str) -> None

        Returns:
            PipelineResult with status clarification, rejected or completed

        Raises:
            PipelineError: If a stage fails for an internal reason
        """
        self.execution_log = []

        def log(msg: str):
            self.execution_log.append(msg)
            logger.info(f"[Pipeline] {msg}")
            if progress_callback:
                progress_callback(msg)

        try:
            log("=== Starting Content Pipeline ===")

            # Phases 1-3: understanding, clarification gate, interpretation
            log("Phase 1: Interpreting request...")
            interpretation = self.interpreter.interpret(prompt, block_only=self.block_only)
            analysis = interpretation.analysis
            log(f"  - Confidence: {analysis.confidence.value}, concepts: {len(analysis.concepts)}")

            if interpretation.needs_clarification:
                decision = interpretation.clarification
                log("⚠ Clarification needed")
                return PipelineResult(
                    status=PipelineStatus.CLARIFICATION,
                    job_id=self.job_id,
                    analysis=analysis,
                    message=decision.message,
                    examples=list(decision.examples),
                    execution_log=list(self.execution_log),
                )

            spec = interpretation.spec
            log(f"✓ Spec '{spec.mod_id}': {len(spec.items)} items, {len(spec.blocks)} blocks, "
                f"{len(spec.recipes)} recipes, {len(spec.wood_types)} wood types")

            # Phase 2: validation gates
            log("Phase 2: Validating specification...")
            report = self.validator.validate(spec, prompt)
            if not report.valid:
                log(f"✗ Rejected by gate '{report.gate}': {report.reason}")
                return PipelineResult(
                    status=PipelineStatus.REJECTED,
                    job_id=self.job_id,
                    analysis=analysis,
                    spec=spec,
                    reason=report.reason,
                    gate=report.gate,
                    execution_log=list(self.execution_log),
                )
            log(f"✓ Passed {len(report.gates_run)} gates")

            # Phase 3: expansion
            log("Phase 3: Expanding specification...")
            expanded = self.expander.expand(spec)
            log(f"✓ Expanded to {len(expanded.items)} items, {len(expanded.blocks)} blocks, "
                f"{len(expanded.recipes)} recipes")

            # Phase 4: planning, accounting and texture synthesis
            log("Phase 4: Planning behavior, credits and textures...")
            intents = spec_intents(spec)
            plans = self.planner.plan_all(intents)
            aggregated = aggregate_execution_plans(plans)
            scope = self.accountant.account([intent for _, intent in intents], prompt=prompt)
            texture_plans = plan_textures(expanded, self.seed, self.synthesizer)
            rasters = self._rasterize(texture_plans) if self.rasterize else {}
            summary = build_request_summary(scope, [_blueprint(p) for p in texture_plans])
            log(f"✓ {len(aggregated.primitives)} primitives, {scope.total_credits} credits "
                f"(budget {scope.budget}, fits: {scope.fits_budget}), {len(texture_plans)} textures")

            # Phase 5: materialization
            log("Phase 5: Materializing files...")
            files = self.materializer.materialize(
                expanded,
                aggregated,
                texture_plans,
                plans=plans,
                summary=summary,
                rasters=rasters,
            )
            log(f"✓ Materialized {len(files)} files")

            # Phase 6: output validation
            log("Phase 6: Validating materialized files...")
            validation = validate_materialized_files(files, expanded)
            log(f"✓ Validation passed ({validation['warnings']} warnings)")

            log("=== Content Pipeline Complete ===")
            return PipelineResult(
                status=PipelineStatus.COMPLETED,
                job_id=self.job_id,
                analysis=analysis,
                spec=spec,
                expanded=expanded,
                plans=plans,
                aggregated_plan=aggregated,
                scope=scope,
                texture_plans=texture_plans,
                files=files,
                summary=summary,
                execution_log=list(self.execution_log),
            )

        except Exception as e:
            log(f"✗ Pipeline failed: {e}")
            raise PipelineError(f"Pipeline failed: {e}") from e

    def _rasterize(self, texture_plans: List[FinalTexturePlan]) -> Dict[str, Any]:
        rasters = {}
        for plan in texture_plans:
            key = f"{plan.category}/{plan.content_id}"
            rasters[key] = self.synthesizer.rasterize(plan, texture_seed(self.seed, plan.category, plan.content_id))
        return rasters

    def write(self, result: PipelineResult, output_dir: Optional[Path] = None) -> Dict[str, Any]:
        """
        Write a completed result and persist its spec

        Args:
            result: Completed pipeline result
            output_dir: Overrides the pipeline's output directory

        Returns:
            Writer report plus the persisted spec version

        Raises:
            PipelineError: If the result did not complete
        """
        if result.status != PipelineStatus.COMPLETED:
            raise PipelineError(f"Cannot write a '{result.status.value}' result")

        root = Path(output_dir) if output_dir else self.output_dir
        report = write_materialized_files(result.files, root)
        spec_manager = SpecManager(root / "modsmith" / "spec")
        report["spec_version"] = spec_manager.save(result.spec, notes=f"Generated by job {result.job_id}")
        return report

    def get_execution_log(self) -> list:
        """Get execution log"""
        return self.execution_log.copy()


def _blueprint(plan: FinalTexturePlan) -> str:
    return f"{plan.content_id}: {plan.palette.family} {plan.procedural_spec.base_noise.value}"


# Convenience function for simple usage
def generate_from_prompt(
    prompt: str,
    job_id: str = "local",
    progress_callback: Optional[Callable[[str], None]] = None,
    write: bool = False,
    **kwargs,
) -> PipelineResult:
    """
    Compile a request (convenience function)

    Args:
        prompt: Request text
        job_id: Unique job identifier
        progress_callback: Optional progress callback
        write: Also write a completed result to the output directory
        **kwargs: Forwarded to ContentPipeline (output_dir, seed, budget, block_only, ...)

    Returns:
        PipelineResult
    """
    pipeline = ContentPipeline(job_id=job_id, **kwargs)
    result = pipeline.run(prompt, progress_callback=progress_callback)
    if write and result.status == PipelineStatus.COMPLETED:
        pipeline.write(result)
    return result


__all__ = [
    "ContentPipeline",
    "PipelineResult",
    "PipelineStatus",
    "PipelineError",
    "spec_intents",
    "generate_from_prompt",
]
