"""
Statistics reported for an optimized texture pack.

The stats object is serialized with camelCase keys into the ``X-Stats``
response header, so field aliases match what existing front-ends read.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

CATEGORY_BUCKETS = ("modelengine", "items", "vanilla", "sounds")

# Target size for a pack that still loads comfortably on low-end clients
TARGET_PACK_SIZE = 13 * 1024 * 1024


class CategoryStats(BaseModel):
    """File count and bytes saved for one category of textures"""
    files: int = Field(0, description="Number of files attributed to the category")
    saved: int = Field(0, description="Bytes saved in the category (may be negative)")


def _empty_categories() -> Dict[str, CategoryStats]:
    return {name: CategoryStats() for name in CATEGORY_BUCKETS}


class PackStats(BaseModel):
    """Running totals for a single optimization request"""
    model_config = ConfigDict(populate_by_name=True)

    total_files: int = Field(0, alias="totalFiles", description="Non-directory entries processed")
    image_files: int = Field(0, alias="imageFiles", description="Entries classified as images")
    sound_files: int = Field(0, alias="soundFiles", description="Entries classified as sounds")
    optimized_images: int = Field(
        0, alias="optimizedImages",
        description="Images that went through the recompressor without failure"
    )
    skipped_files: int = Field(
        0, alias="skippedFiles",
        description="Images copied through unchanged because processing failed"
    )
    critical_files: int = Field(0, alias="criticalFiles", description="Entries copied as critical files")
    hd_textures_found: int = Field(
        0, alias="hdTexturesFound",
        description="Images with either dimension of 512 pixels or more"
    )
    original_size: int = Field(0, alias="originalSize", description="Sum of input entry sizes in bytes")
    optimized_size: int = Field(
        0, alias="optimizedSize",
        description="Sum of output entry sizes before container compression"
    )
    final_zip_size: int = Field(0, alias="finalZipSize", description="Size of the serialized archive")
    saved_bytes: int = Field(0, alias="savedBytes", description="originalSize - finalZipSize")
    saved_percent: float = Field(0.0, alias="savedPercent", description="Percentage saved")
    final_size_mb: float = Field(0.0, alias="finalSizeMB", description="Final archive size in MB")
    target_achieved: bool = Field(False, alias="targetAchieved", description="Final size within 13 MB")
    processing_time: float = Field(0.0, alias="processingTime", description="Processing time in seconds")
    categories: Dict[str, CategoryStats] = Field(default_factory=_empty_categories)

    def add_to_category(self, bucket: Optional[str], saved: int) -> None:
        if bucket is None:
            return
        category = self.categories[bucket]
        category.files += 1
        category.saved += saved

    def finalize(self, final_zip_size: int, elapsed: float = 0.0) -> None:
        """
        Fill in the totals that depend on the serialized archive.

        Args:
            final_zip_size: Length of the serialized output archive in bytes
            elapsed: Wall-clock processing time in seconds
        """
        self.final_zip_size = final_zip_size
        self.saved_bytes = self.original_size - final_zip_size
        if self.original_size > 0:
            self.saved_percent = round(self.saved_bytes / self.original_size * 100, 2)
        else:
            self.saved_percent = 0.0
        self.final_size_mb = round(final_zip_size / 1024 / 1024, 2)
        self.target_achieved = final_zip_size <= TARGET_PACK_SIZE
        self.processing_time = round(elapsed, 4)

    def to_header(self) -> str:
        return self.model_dump_json(by_alias=True)
