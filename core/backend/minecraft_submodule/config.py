"""
Configuration for Minecraft Submodule

Defines default paths, remote endpoints and the static link tables.
"""

from pathlib import Path

# Build description search paths (first found wins)
CONFIG_FILE_NAME = "submodule.yaml"
USER_CONFIG_FILE = Path.home() / ".config" / "minecraft-submodule" / "config.yaml"

# Relative to the repository root
GRADLE_DIR = Path(".gradle")
NEOFORM_CACHE_DIR = GRADLE_DIR / "neoform-version-cache"
LOG_DIR = GRADLE_DIR / "submodule-logs"
OUTPUT_DIR = Path("build") / "submodule"
JAVADOC_LINKS_FILE = "javadoc-links.txt"

# API Endpoints
NEOFORM_INDEX_URL = "https://maven.neoforged.net/api/maven/versions/releases/net/neoforged/neoform"
KNEELAWK_JAVADOC = "https://maven.kneelawk.com/javadoc/releases/com/kneelawk/javadoc-mc"

HTTP_TIMEOUT = 10

# Resource files whose ${...} tokens are expanded on every platform
METADATA_FILES = (
    "quilt.mod.json",
    "fabric.mod.json",
    "META-INF/mods.toml",
    "META-INF/neoforge.mods.toml",
    "pack.mcmeta",
)

# Editor project files that never ship
EXCLUDED_RESOURCE_SUFFIXES = (".xcf", ".bbmodel")

# Properties every build description must set
REQUIRED_PROPERTIES = ("mod_id", "java_version")

# Defaults for properties a build description commonly leaves unset
DEFAULT_PROPERTIES = {
    "submodule.mode": "platform",
    "submodule.xplat.mode": "minivan",
    "submodule.kotlin": False,
    "mappings_type": "mojmap",
    "javadoc_build": "1",
    "jetbrains_annotations_version": "24.0.0",
}

# Libraries Minecraft ships with
BASE_JAVADOC_LINKS = (
    "https://guava.dev/releases/32.1.2-jre/api/docs/",
    "https://www.javadoc.io/doc/com.google.code.gson/gson/2.10.1/",
    "https://logging.apache.org/log4j/2.x/javadoc/log4j-api/",
    "https://www.slf4j.org/apidocs/",
    "https://javadoc.lwjgl.org/",
    "https://javadoc.io/doc/it.unimi.dsi/fastutil/latest/",
    "https://javadoc.scijava.org/JOML/",
    "https://netty.io/4.1/api/",
    "https://www.oshi.ooo/oshi-core-java11/apidocs/",
    "https://java-native-access.github.io/jna/5.13.0/javadoc/",
    "https://unicode-org.github.io/icu-docs/apidoc/released/icu4j/",
    "https://jopt-simple.github.io/jopt-simple/apidocs/",
    "https://solutions.weblite.ca/java-objective-c-bridge/docs/",
    "https://commons.apache.org/proper/commons-logging/apidocs/",
    "https://commons.apache.org/proper/commons-lang/javadocs/api-release/",
    "https://commons.apache.org/proper/commons-io/apidocs/",
    "https://commons.apache.org/proper/commons-codec/archives/1.15/apidocs/",
    "https://commons.apache.org/proper/commons-compress/apidocs/",
    "https://hc.apache.org/httpcomponents-client-4.5.x/current/httpclient/apidocs/",
    "https://docs.oracle.com/en/java/javase/21/docs/api/",
)
