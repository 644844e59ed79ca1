from pydantic import BaseModel

from surrealqb import (
    Foreign,
    KeyedModel,
    Loaded,
    QueryBuilder,
    Unloaded,
    configure_logging,
    model,
)

release = model("Release", "name")
project = model(
    "Project",
    "name",
    "->has->Release as releases",
    "<-manage<-Account as authors",
)
account = model(
    "Account",
    "handle",
    "password",
    "email",
    "friend<Account>",
    "->manage->Project as managed_projects",
)


class Release(KeyedModel):
    name: str = ""


class Project(KeyedModel):
    name: str = ""
    releases: Foreign[list[Release]] = Unloaded()


class Account(KeyedModel):
    handle: str = ""
    password: str = ""
    email: str = ""
    projects: Foreign[list[Project]] = Unloaded()

    @classmethod
    def __set_object__(cls, builder: QueryBuilder) -> QueryBuilder:
        """Fill a SET clause with one parameter per field."""
        return builder.set_many(
            [
                account.handle.equals_parameterized(),
                account.password.equals_parameterized(),
                account.email.equals_parameterized(),
            ]
        )


class File(BaseModel):
    name: str
    author: Foreign[Account] = Unloaded()


def main() -> None:
    configure_logging(verbose=True)

    create = (
        QueryBuilder()
        .create(account.handle.as_named_label(str(account)))
        .set_object(Account)
        .build()
    )
    print(create)

    include_releases = True
    select = (
        QueryBuilder()
        .select("*")
        .also(account.managed_projects().name.as_alias("project_names"))
        .if_then(
            include_releases,
            lambda q: q.also(
                account.managed_projects().releases().name.as_alias("release_names")
            ),
        )
        .from_(account)
        .filter(account.email.equals_parameterized())
        .fetch_many([account.friend, account.managed_projects])
        .build()
    )
    print(select)

    file = File(name="notes.md", author=Loaded(Account(id="Account:John", handle="john")))
    payload = file.model_dump_json()
    print(payload)
    print(File.model_validate_json(payload).author)


if __name__ == "__main__":
    main()
