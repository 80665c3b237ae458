"""Transfer resource: read-only lookup of merchant settlements."""

from ..errors import WorldpayValidationError
from ..models.responses import TransferDetailResponse, TransferSearchResponse
from .base import ResourceService


class TransferService(ResourceService):
    resource = "transfers"

    def get(self, transfer_id: str) -> TransferDetailResponse:
        self._require_id(transfer_id, "transfer_id")
        return self._parse(TransferDetailResponse, self._request("GET", self._url(transfer_id)))

    def search(self, merchant_id: str, page_number: int = 1) -> TransferSearchResponse:
        self._require_id(merchant_id, "merchant_id")
        if page_number < 1:
            raise WorldpayValidationError("page_number starts at 1", field="page_number")
        data = self._request(
            "GET", self._url(), params={"merchantId": merchant_id, "pageNumber": page_number}
        )
        return self._parse(TransferSearchResponse, data)
