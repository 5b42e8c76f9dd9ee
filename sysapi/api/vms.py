from typing import List

from fastapi import APIRouter, HTTPException, Request

from sysapi.errors import UpstreamUnavailable
from sysapi.models.vm import VirtualMachine
from sysapi.services import vm_monitor

router = APIRouter()


@router.get(
    "/vms",
    response_model=List[VirtualMachine],
    summary="Virtual machine inventory",
)
def list_vms(request: Request) -> List[VirtualMachine]:
    """
    Return name, state, vCPU count and memory figures for every domain known
    to the hypervisor at Settings.libvirt_uri.

    Domains whose detail queries fail are still listed with default values.
    If the hypervisor cannot be reached or refuses to list its domains, a
    HTTP 500 with a plain-text message is returned instead of a list.
    """
    state = request.app.state
    try:
        return vm_monitor.list_virtual_machines(state.settings.libvirt_uri, state.logger)
    except UpstreamUnavailable as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
