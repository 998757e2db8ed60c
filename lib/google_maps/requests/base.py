from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Tuple

from ..constants import API_BASE_URL, CREDENTIAL_HEADER
from ..decoder import ResponseSchema
from ..enums import Api
from ..query import QueryAssembler, RequestDescriptor


class MapsRequest(ABC):
    """
    Base class for endpoint requests.

    Subclasses are frozen dataclasses declaring the API group, the endpoint
    path, a QueryAssembler with their fields and rules, and where the
    response keeps its results. Values are checked only when describe()
    is called, so a request can be built up with ``with*`` calls first.
    """

    API: ClassVar[Api]
    PATH: ClassVar[str]
    ASSEMBLER: ClassVar[QueryAssembler]
    SCHEMA: ClassVar[ResponseSchema] = ResponseSchema()

    @abstractmethod
    def toValues(self) -> Dict[str, Any]:
        """
        Field values keyed by wire name.

        Returns:
            Mapping consumed by the endpoint's QueryAssembler. Absent
            fields may be omitted or set to None.
        """
        pass

    def describe(self, baseUrl: str = API_BASE_URL) -> RequestDescriptor:
        """
        Validate and serialize the request.

        Raises:
            ValidationError: If any field or cross-field rule is violated
        """
        return RequestDescriptor(
            api=self.API,
            path=self.PATH,
            params=self.ASSEMBLER.assemble(self.toValues()),
            baseUrl=baseUrl,
        )


class JsonBodyRequest(MapsRequest):
    """
    Base class for endpoints taking a JSON body over POST.

    The fields are validated by the same QueryAssembler machinery, then
    ``toBody()`` builds the JSON object from the present values. The
    credential travels in a header, never in the URL. These endpoints live
    on their own host, so ``BASE_URL`` wins over the configured API root.
    """

    BASE_URL: ClassVar[str]

    @abstractmethod
    def toBody(self, present: Mapping[str, Any]) -> Dict[str, Any]:
        """JSON body built from the validated, present field values."""
        pass

    def toHeaders(self) -> Tuple[Tuple[str, str], ...]:
        return ()

    def describe(self, baseUrl: str = API_BASE_URL) -> RequestDescriptor:
        present = self.ASSEMBLER.validate(self.toValues())
        return RequestDescriptor(
            api=self.API,
            path=self.PATH,
            params=(),
            baseUrl=self.BASE_URL,
            method="POST",
            body=self.toBody(present),
            headers=self.toHeaders(),
            credentialHeader=CREDENTIAL_HEADER,
        )
