# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Request/response modifier applying the splitter and the merger."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._encoding import EncoderCapabilityRegistry
from ._merger import merge_observations, should_merge
from ._messages import (
    GetObservationRequest,
    GetObservationResponse,
    InsertObservationRequest,
)
from ._splitter import SplitOrder, split_observations

if TYPE_CHECKING:
    from ..config import ServiceProfile

_logger = logging.getLogger(__name__)


class SplitMergeModifier:
    """Split array observations on insertion, merge observations on retrieval.

    The service profile is given on every call, so a new profile takes effect
    on the next request.

    Example:
        ```python
        from frequenz.sos.config import ServiceProfile
        from frequenz.sos.observation import (
            EncoderCapabilityRegistry,
            GetObservationRequest,
            GetObservationResponse,
            SplitMergeModifier,
        )

        modifier = SplitMergeModifier(EncoderCapabilityRegistry())
        profile = ServiceProfile(identifier="default", merge_values=True)
        response = modifier.modify_response(
            GetObservationRequest(), GetObservationResponse(), profile=profile
        )
        assert response.merge_observations
        ```
    """

    def __init__(self, registry: EncoderCapabilityRegistry) -> None:
        """Create a modifier.

        Args:
            registry: The merge capabilities of the response encoders.
        """
        self._registry = registry

    def modify_request(
        self,
        request: InsertObservationRequest,
        *,
        profile: ServiceProfile | None = None,
    ) -> InsertObservationRequest:
        """Split the array observations of a request, if it asks for it.

        Args:
            request: The request to modify, its observations are replaced.
            profile: The active service profile, selecting the split order.

        Returns:
            The modified request.
        """
        if not request.split_data_array_into_observations:
            return request
        order = profile.split_order if profile is not None else SplitOrder.ROW_ORDER
        request.observations = split_observations(request.observations, order=order)
        return request

    def modify_response(
        self,
        request: GetObservationRequest | None,
        response: GetObservationResponse,
        *,
        profile: ServiceProfile | None = None,
    ) -> GetObservationResponse:
        """Merge the observations of a response, if anyone asks for it.

        When there is no request, only the encoder of the response is asked.
        Streamed responses answering a request are flagged as merged but their
        observations are left untouched, the encoder merges them while
        streaming. Streamed responses without a request are left as they are.

        Args:
            request: The request the response answers, if known. Its
                `merge_observation_values` flag is updated.
            response: The response to modify.
            profile: The active service profile.

        Returns:
            The modified response.
        """
        encoder_merge = self._registry.should_merge(response)
        if request is not None:
            request_merge = should_merge(
                profile_merge=profile is not None and profile.merge_values,
                request_merge=request.merge_observations_into_data_array,
                encoder_merge=False,
            )
            request.merge_observation_values = request_merge
        else:
            request_merge = False

        if not should_merge(
            profile_merge=False,
            request_merge=request_merge,
            encoder_merge=encoder_merge,
        ):
            return response

        if response.streaming:
            if request is None:
                _logger.debug("Streaming response without request, not merging")
                return response
            _logger.debug("Streaming response, merging is left to the encoder")
        else:
            compare_offering = profile is not None and profile.compare_offering
            response.observations = merge_observations(
                response.observations, compare_offering=compare_offering
            )
        response.merge_observations = True
        return response
