"""Admin API: mounted packs, failures and public prefixes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from packhost.api.deps import get_packs, require_auth
from packhost.models.user import User
from packhost.packs.state import PackHostState
from packhost.schemas.packs import MountRecordRead, PackFailureRead, PackStateRead

router = APIRouter()


@router.get("/packs", response_model=PackStateRead)
def list_mounted_packs(
    packs: PackHostState = Depends(get_packs),
    user: User = Depends(require_auth),
) -> PackStateRead:
    """List mounted packs (in mount order), packs that failed, and public prefixes."""
    mounted = [
        MountRecordRead(
            slug=r.slug,
            directory=r.directory,
            entry_path=str(r.entry_path),
            root_path=str(r.root_path),
            public_prefixes=list(r.public_prefixes),
        )
        for r in packs.mount_records
    ]
    failures = [
        PackFailureRead(
            slug=f.slug,
            stage=f.stage,
            error_type=f.error_type,
            message=f.message,
            entry_path=str(f.entry_path),
            root_path=str(f.root_path) if f.root_path is not None else None,
        )
        for f in packs.failures
    ]
    return PackStateRead(
        namespace=packs.namespace,
        mounted=mounted,
        failures=failures,
        public_prefixes=packs.public_prefixes.as_list(),
    )
