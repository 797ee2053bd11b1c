"""Team and employee reference data."""

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    """Crew that tasks can be assigned to."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int | str = Field(..., description="Unique team ID")
    name: str = Field(default="", alias="nazwa", description="Display name of the team")
    user_ids: tuple[int | str, ...] = Field(default=(), description="Employees belonging to the team")


class Employee(BaseModel):
    """Single employee that person-level tasks (e.g. trainings) are assigned to."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | str = Field(..., description="Unique employee ID")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    phone: str | None = Field(default=None, description="Contact phone number")
    email: str | None = Field(default=None, description="Contact e-mail")
    avatar: str | None = Field(default=None, description="Avatar URL")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class EmployeesResponse(BaseModel):
    """Employee list as returned by the staff endpoint (wrapped, unlike teams)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    employees: tuple[Employee, ...] = Field(default=(), description="All employees")
