import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from blinkmint.core.registry import get_pinata
from blinkmint.shared.pinata_client import PinataClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.post("")
async def upload_file(
    file: UploadFile = File(..., description="asset to pin"),
    pinata: PinataClient = Depends(get_pinata),
):
    """
    Relay a multipart upload to Pinata and return its IpfsHash.

    **Possible errors:**
    - 500: Pinata rejected the file or returned no hash
    """
    try:
        content = await file.read()
        filename = file.filename or "upload.bin"
        result = await pinata.pin_file_to_ipfs(
            content,
            filename,
            content_type=file.content_type,
            metadata={"name": filename},
        )
        ipfs_hash = result.get("IpfsHash")
        if not ipfs_hash:
            raise ValueError(f"Pinata returned no IpfsHash: {result}")
        return JSONResponse({"IpfsHash": ipfs_hash}, status_code=200)
    except Exception:
        logger.exception("Relaying upload to Pinata failed")
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)
