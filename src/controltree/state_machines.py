"""State-machine control assembly."""

import logging
from typing import Any, List, Optional, Sequence

from controltree.capabilities import entry_field, get_capability
from controltree.control_tree import StateMachineControl, StateMachineInputControl
from controltree.descriptor import StaticDescriptor

logger = logging.getLogger(__name__)


def build_state_machine_controls(handle: Any, descriptor: Optional[StaticDescriptor],
                                 artboard_name: Optional[str],
                                 state_machine_names: Sequence[str]) -> List[StateMachineControl]:
    """Collect live inputs for each active state machine.

    State machines without live inputs are left out. Static input metadata,
    when the descriptor has it, is attached by input name.
    """
    controls: List[StateMachineControl] = []
    if handle is None:
        return controls

    get_inputs = get_capability(handle, "stateMachineInputs")
    if get_inputs is None:
        logger.debug("Runtime handle has no stateMachineInputs capability")
        return controls

    for sm_name in state_machine_names:
        if not sm_name:
            continue
        try:
            live_inputs = list(get_inputs(sm_name) or [])
            if not live_inputs:
                logger.debug(f"State machine '{sm_name}' has no live inputs; omitted")
                continue

            parsed_sm = descriptor.find_state_machine(artboard_name, sm_name) if descriptor else None
            control = StateMachineControl(name=sm_name, is_active=True)
            for live_input in live_inputs:
                input_name = entry_field(live_input, "name")
                control.inputs.append(StateMachineInputControl(
                    name=input_name,
                    type=entry_field(live_input, "type"),
                    live_input=live_input,
                    parsed_info=parsed_sm.find_input(input_name) if parsed_sm else None,
                ))
            controls.append(control)
            logger.debug(f"State machine '{sm_name}': {len(control.inputs)} input(s)")
        except Exception as e:
            logger.error(f"Error processing state machine '{sm_name}': {e}")
    return controls
