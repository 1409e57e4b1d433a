"""
Texture Schema - Aesthetic profile through final texture plan

Order of production:
1. AestheticProfile (+ semantic tags) from the interpretation layer
2. TextureRecipe derived from the profile
3. GeneratedPalette, ProceduralTextureSpec, StyledTextureSpec
4. FinalTexturePlan, optionally rasterized into a RasterizedTexture
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class AnimationHint(str, Enum):
    """Animation intents an aesthetic profile can carry"""
    PULSE = "pulse"
    DRIP = "drip"
    SPARKLE = "sparkle"
    WAVE = "wave"


class ContrastLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BaseNoise(str, Enum):
    """Base noise kinds used by rasterization"""
    PERLIN = "perlin"
    SIMPLEX = "simplex"
    CELLULAR = "cellular"
    CRYSTAL = "crystal"
    ORGANIC = "organic"
    METALLIC = "metallic"


class DetailLayerType(str, Enum):
    """Detail layers applied on top of the base noise"""
    NOISE = "noise"
    CRACKLE = "crackle"
    DRIP = "drip"
    VEINS = "veins"
    SPARKLES = "sparkles"
    CORROSION = "corrosion"
    FROST = "frost"


class TextureStyle(str, Enum):
    """Style transforms; a style never changes procedural structure"""
    VANILLA = "vanilla"
    FANTASY = "fantasy"
    DARK_FANTASY = "dark_fantasy"
    CUTE = "cute"
    INDUSTRIAL = "industrial"
    SCI_FI = "sci_fi"
    ANCIENT = "ancient"
    MAGICAL = "magical"


class AestheticProfile(BaseModel):
    """Aesthetic axes of one entity; drives every texture decision"""
    material_hint: str = Field("organic", description="Open-ended material word (ice, metal, crystal, ...)")
    color_palette: List[str] = Field(default_factory=list, description="Hex colors, e.g. '#FFD700'")
    glow: bool = False
    animation_hint: Optional[AnimationHint] = None
    overlay_hints: List[str] = Field(default_factory=list, description="e.g. 'radioactive_speckles'")


class InterpretedAesthetics(BaseModel):
    """Semantic tags plus aesthetic profile for one piece of text"""
    text: str = ""
    kind: str = Field("item", description="'item' or 'block'")
    semantic_tags: List[str] = Field(default_factory=list)
    aesthetic: AestheticProfile = Field(default_factory=AestheticProfile)
    fallback: bool = Field(False, description="True when no keyword matched and the evocative default was used")


class TextureSource(BaseModel):
    """Base material or overlay entry of a texture recipe"""
    type: str = Field(..., description="material, overlay or procedural")
    key: str


class AnimationSpec(BaseModel):
    type: AnimationHint
    speed: float = 1.0


class TextureRecipe(BaseModel):
    """Base + overlays + palette + animation derived from an aesthetic profile"""
    base: TextureSource
    overlays: List[TextureSource] = Field(default_factory=list)
    palette_shift: List[str] = Field(default_factory=list)
    animation: Optional[AnimationSpec] = None


class GeneratedPalette(BaseModel):
    """Palette and motifs; 3-6 colors, never grayscale-only"""
    colors: List[str] = Field(..., min_length=3, max_length=6)
    primary_motif: str
    secondary_motifs: List[str] = Field(default_factory=list)
    contrast_level: ContrastLevel = ContrastLevel.MEDIUM
    family: str = Field(..., description="Palette family the colors came from")


class DetailLayer(BaseModel):
    type: DetailLayerType
    intensity: float


class PostProcess(BaseModel):
    blur: float = 0.0
    sharpen: float = 0.1
    glow_mask: bool = False


class ProceduralTextureSpec(BaseModel):
    """Pure-data procedural description; detail_layers is never empty"""
    base_noise: BaseNoise
    scale: float
    contrast: float
    detail_layers: List[DetailLayer] = Field(..., min_length=1)
    post_process: PostProcess = Field(default_factory=PostProcess)


class StyledTextureSpec(BaseModel):
    """Procedural spec plus style post-processing parameters"""
    source: ProceduralTextureSpec
    style: TextureStyle
    saturation: float
    contrast_curve: float
    edge_softness: float
    glow_diffusion: float
    vanilla_color_clamp: bool = False


class FinalTexturePlan(BaseModel):
    """The single authoritative texture description for one entity"""
    content_id: Optional[str] = None
    category: Optional[str] = None
    semantic_tags: List[str] = Field(default_factory=list)
    palette: GeneratedPalette
    procedural_spec: ProceduralTextureSpec
    styled_spec: StyledTextureSpec
    animation_spec: Optional[AnimationSpec] = None
    color_hint: Optional[str] = None
    default_reference: Optional[str] = Field(None, description="Vanilla texture this entity resembles")
    fallback_reason: Optional[str] = None


class RasterizedTexture(BaseModel):
    """Deterministic RGBA pixel buffer rendered from a FinalTexturePlan"""
    size: int
    pixels: bytes = Field(..., description="RGBA, row-major, size*size*4 bytes")
    hash: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


__all__ = [
    "AnimationHint",
    "ContrastLevel",
    "BaseNoise",
    "DetailLayerType",
    "TextureStyle",
    "AestheticProfile",
    "InterpretedAesthetics",
    "TextureSource",
    "AnimationSpec",
    "TextureRecipe",
    "GeneratedPalette",
    "DetailLayer",
    "PostProcess",
    "ProceduralTextureSpec",
    "StyledTextureSpec",
    "FinalTexturePlan",
    "RasterizedTexture",
]
