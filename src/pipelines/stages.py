"""Stage table for the Noir → Groth16 → Solana build pipeline."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from core.errors import ManifestError
from schemas.internal.pipeline import ArtifactKind

NARGO_TOML = "Nargo.toml"
NARGO = "nargo"
SUNSPOT = "sunspot"
SOLANA = "solana"
REQUIRED_TOOLS = (NARGO, SUNSPOT)


@dataclass(frozen=True)
class ArtifactSpec:
    """A file expected in the stage directory, named ``<circuit><suffix>``."""

    suffix: str
    kind: ArtifactKind
    in_root: bool = False

    def path(self, circuit: str, root: Path, target: Path) -> Path:
        if self.kind is ArtifactKind.MANIFEST:
            return root / NARGO_TOML
        base = root if self.in_root else target
        return base / f"{circuit}{self.suffix}"


@dataclass(frozen=True)
class StageSpec:
    name: str
    description: str
    tool: str
    args: Callable[[str], list[str]]
    in_target_dir: bool = True
    requires: tuple[ArtifactSpec, ...] = ()
    produces: tuple[ArtifactSpec, ...] = field(default_factory=tuple)


MANIFEST = ArtifactSpec("", ArtifactKind.MANIFEST, in_root=True)
CIRCUIT = ArtifactSpec(".json", ArtifactKind.CIRCUIT)
WITNESS = ArtifactSpec(".gz", ArtifactKind.WITNESS)
CONSTRAINT_SYSTEM = ArtifactSpec(".ccs", ArtifactKind.CONSTRAINT_SYSTEM)
PROVING_KEY = ArtifactSpec(".pk", ArtifactKind.PROVING_KEY)
VERIFYING_KEY = ArtifactSpec(".vk", ArtifactKind.VERIFYING_KEY)
PROOF = ArtifactSpec(".proof", ArtifactKind.PROOF)
PUBLIC_WITNESS = ArtifactSpec(".pw", ArtifactKind.PUBLIC_WITNESS)
CHAIN_PROGRAM = ArtifactSpec(".so", ArtifactKind.CHAIN_PROGRAM)


PIPELINE_STAGES: tuple[StageSpec, ...] = (
    StageSpec(
        name="Execute",
        description="Running nargo execute",
        tool=NARGO,
        args=lambda _circuit: ["execute"],
        in_target_dir=False,
        requires=(MANIFEST,),
        produces=(CIRCUIT, WITNESS),
    ),
    StageSpec(
        name="Compile",
        description="Compiling ACIR to CCS",
        tool=SUNSPOT,
        args=lambda circuit: ["compile", f"{circuit}.json"],
        requires=(CIRCUIT,),
        produces=(CONSTRAINT_SYSTEM,),
    ),
    StageSpec(
        name="Setup",
        description="Generating proving and verifying keys",
        tool=SUNSPOT,
        args=lambda circuit: ["setup", f"{circuit}.ccs"],
        requires=(CONSTRAINT_SYSTEM,),
        produces=(PROVING_KEY, VERIFYING_KEY),
    ),
    StageSpec(
        name="Prove",
        description="Creating Groth16 proof",
        tool=SUNSPOT,
        args=lambda circuit: [
            "prove",
            f"{circuit}.json",
            f"{circuit}.gz",
            f"{circuit}.ccs",
            f"{circuit}.pk",
        ],
        requires=(CIRCUIT, WITNESS, CONSTRAINT_SYSTEM, PROVING_KEY),
        produces=(PROOF, PUBLIC_WITNESS),
    ),
    StageSpec(
        name="Verify",
        description="Verifying proof",
        tool=SUNSPOT,
        args=lambda circuit: [
            "verify",
            f"{circuit}.vk",
            f"{circuit}.proof",
            f"{circuit}.pw",
        ],
        requires=(VERIFYING_KEY, PROOF, PUBLIC_WITNESS),
    ),
    StageSpec(
        name="Deploy",
        description="Creating Solana verification program",
        tool=SUNSPOT,
        args=lambda circuit: ["deploy", f"{circuit}.vk"],
        requires=(VERIFYING_KEY,),
        produces=(CHAIN_PROGRAM,),
    ),
)


def read_circuit_name(root: Path) -> str:
    """Read ``[package].name`` from the project's Nargo.toml."""
    manifest = root / NARGO_TOML
    if not manifest.is_file():
        raise ManifestError(
            PIPELINE_STAGES[0].name,
            "Nargo.toml not found; make sure you are in a Noir project directory",
            path=manifest,
        )
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ManifestError(
            PIPELINE_STAGES[0].name, f"Failed to parse Nargo.toml: {exc}", path=manifest
        ) from exc
    package = data.get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name.strip():
        raise ManifestError(
            PIPELINE_STAGES[0].name, "Nargo.toml has no [package] name", path=manifest
        )
    return name.strip()


__all__ = [
    "ArtifactSpec",
    "CHAIN_PROGRAM",
    "NARGO",
    "NARGO_TOML",
    "PIPELINE_STAGES",
    "REQUIRED_TOOLS",
    "SOLANA",
    "SUNSPOT",
    "StageSpec",
    "read_circuit_name",
]
