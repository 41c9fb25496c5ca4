"""
Texture pack optimization endpoint.
"""
import logging
import os
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from texture_optimizer import config
from texture_optimizer.api.errors import error_response
from texture_optimizer.core.exceptions import UploadTooLargeError
from texture_optimizer.core.pipeline import optimize_pack
from texture_optimizer.models.options import ProcessingOptions

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Texture Pack Optimization"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type"
}


async def read_upload(file: UploadFile, limit: int) -> bytes:
    """
    Read an uploaded file, refusing anything larger than limit bytes.

    Raises:
        UploadTooLargeError: If the upload exceeds the limit
    """
    if file.size is not None and file.size > limit:
        raise UploadTooLargeError(file.size, limit)

    content = await file.read(limit + 1)
    if len(content) > limit:
        raise UploadTooLargeError(len(content), limit)
    return content


def content_disposition(filename: str) -> str:
    """Build an attachment header value that survives latin-1 header encoding."""
    filename = os.path.basename(filename.replace("\\", "/")).replace('"', "")
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(filename)}'


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


@router.post("/optimize")
async def optimize_texture_pack(
    file: Optional[UploadFile] = File(None),
    resolution: str = Form("256"),
    quality: str = Form("85"),
    output_format: str = Form("png", alias="format"),
    aggressive: str = Form("false"),
    device_mode: str = Form("potato", alias="deviceMode")
):
    """
    Optimize an uploaded resource pack.

    - **file**: Zip archive containing the resource pack
    - **resolution**: Base maximum texture resolution (default 256)
    - **quality**: Encoder quality 1-100 (default 85)
    - **format**: Output image format, png or webp (default png)
    - **aggressive**: "true" to reduce PNGs to an indexed palette
    - **deviceMode**: potato, balanced or quality (default potato)

    Returns:
        The optimized archive, with statistics in the X-Stats header
    """
    if file is None:
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})

    try:
        options = ProcessingOptions(
            target_resolution=resolution.strip(),
            quality=quality.strip(),
            output_format=output_format.strip().lower(),
            aggressive_mode=aggressive == "true",
            device_mode=device_mode.strip().lower()
        )
    except ValidationError as e:
        logger.warning(f"Rejected options for {file.filename}: {e}")
        return JSONResponse(
            status_code=400,
            content={"error": f"Invalid options: {_describe_validation_error(e)}"}
        )

    try:
        content = await read_upload(file, config.MAX_UPLOAD_SIZE)
    except UploadTooLargeError as e:
        logger.warning(f"Rejected upload {file.filename}: {e.size} bytes over the {e.limit} byte limit")
        return JSONResponse(
            status_code=413,
            content={"error": str(e), "suggestion": "Split the pack or remove unused assets before uploading"}
        )

    logger.info(
        f"Optimizing {file.filename} ({len(content)} bytes): resolution={options.target_resolution}, "
        f"quality={options.quality}, format={options.output_format.value}, "
        f"aggressive={options.aggressive_mode}, deviceMode={options.device_mode.value}"
    )

    try:
        result = await run_in_threadpool(optimize_pack, content, options)
    except Exception as e:
        logger.error(f"Error processing {file.filename}: {str(e)}", exc_info=True)
        return error_response(e)

    output_name = result.output_filename(file.filename)

    return Response(
        content=result.data,
        media_type="application/zip",
        headers={
            "Content-Disposition": content_disposition(output_name),
            "X-Stats": result.stats.to_header()
        }
    )


@router.options("/optimize")
async def optimize_preflight():
    """Answer CORS preflight requests."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("/optimize", methods=["GET", "PUT", "PATCH", "DELETE", "HEAD"], include_in_schema=False)
async def optimize_method_not_allowed():
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST, OPTIONS"}
    )
