"""
Configuration for the modsmith content generator
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent
GENERATED_DIR = Path(os.getenv("GENERATED_DIR", str(BASE_DIR / "generated")))

# Canonical Content Specification
SCHEMA_VERSION = 1

# Minecraft/Fabric target platform (fixed; the version gate compares against these)
MINECRAFT_VERSION = os.getenv("MINECRAFT_VERSION", "1.21.1")
LOADER = os.getenv("LOADER", "fabric")
FABRIC_LOADER_VERSION = os.getenv("FABRIC_LOADER_VERSION", "0.16.5")
FABRIC_API_VERSION = os.getenv("FABRIC_API_VERSION", "0.105.0+1.21.1")
YARN_MAPPINGS = os.getenv("YARN_MAPPINGS", f"{MINECRAFT_VERSION}+build.3")
JAVA_VERSION = os.getenv("JAVA_VERSION", "21")

# Resource Pack Configuration
RESOURCE_PACK_FORMAT = int(os.getenv("RESOURCE_PACK_FORMAT", "34"))

# Generated sources
JAVA_PACKAGE_ROOT = os.getenv("JAVA_PACKAGE_ROOT", "net.modsmith")
DEFAULT_MOD_ID = os.getenv("DEFAULT_MOD_ID", "generated")

# Credits
CREDIT_TIERS = (30, 60, 120, 300)
DEFAULT_CREDIT_BUDGET = int(os.getenv("DEFAULT_CREDIT_BUDGET", "30"))
if DEFAULT_CREDIT_BUDGET not in CREDIT_TIERS:
    print(
        f"[Config] Warning: credit budget {DEFAULT_CREDIT_BUDGET} is not one of {CREDIT_TIERS}. "
        f"Defaulting to {CREDIT_TIERS[0]}. Set DEFAULT_CREDIT_BUDGET to override."
    )
    DEFAULT_CREDIT_BUDGET = CREDIT_TIERS[0]

# Texture synthesis
DEFAULT_TEXTURE_SEED = os.getenv("DEFAULT_TEXTURE_SEED", "modsmith")
RASTERIZE_TEXTURES = os.getenv("RASTERIZE_TEXTURES", "true").strip().lower() in ("1", "true", "yes", "on")
TEXTURE_SIZE = int(os.getenv("TEXTURE_SIZE", "16"))
if TEXTURE_SIZE not in (16, 32):
    print(
        f"[Config] Warning: texture size {TEXTURE_SIZE} is not supported. "
        "Defaulting to 16. Set TEXTURE_SIZE to 16 or 32."
    )
    TEXTURE_SIZE = 16

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
