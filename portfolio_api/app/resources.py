"""
The resources served under ``/crud``.

Route names follow the original French naming (``membres``, ``pays``)
used by existing clients; ``members`` and ``countries`` are accepted
as aliases.  Labels appear in response messages such as
``"Membre created successfully"``.
"""

from .schemas.country import CountryIn
from .schemas.member import MemberIn
from .schemas.project import ProjectIn
from .schemas.service import ServiceIn
from .services.crud_service import Resource


MEMBERS = Resource(
    name="membres",
    table="membres",
    label="Membre",
    schema=MemberIn,
    unique=("email",),
    aliases=("members",),
)

COUNTRIES = Resource(
    name="pays",
    table="pays",
    label="Pay",
    schema=CountryIn,
    aliases=("countries",),
)

PROJECTS = Resource(name="projects", table="projects", label="Project", schema=ProjectIn)

SERVICES = Resource(name="services", table="services", label="Service", schema=ServiceIn)

RESOURCES = (PROJECTS, COUNTRIES, SERVICES, MEMBERS)
