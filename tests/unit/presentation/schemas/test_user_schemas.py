import pytest
import pydantic as p
import payback.presentation.schemas as schemas

@pytest.mark.models
def test_empty_string_to_none_conversion():
    data = {
        "username": "   ",
        "email": "",
        "password": "Secret123!",
    }
    model = schemas.RegistrationModel(**data)
    assert model.username is None
    assert model.email is None


@pytest.mark.models
def test_camel_case_input_and_output():
    model = schemas.RoleUpdateModel.model_validate({"username": "alice", "password": "x", "roleId": 3})
    assert model.role_id == 3

    model = schemas.UsernameUpdateModel(username="alice", password="x", new_username="bob")
    assert model.new_username == "bob"

    dto = schemas.LoginDTO(username="alice", email=None, role_id=2, token="t", logged_in=True)
    assert dto.model_dump(by_alias=True) == {
        "username": "alice",
        "email": None,
        "roleId": 2,
        "token": "t",
        "loggedIn": True,
    }


@pytest.mark.models
def test_public_dto_has_no_password_fields():
    fields = set(schemas.PublicUserDTO.model_fields)
    assert fields == {"username", "email", "role_id"}


@pytest.mark.models
def test_role_must_not_be_negative():
    with pytest.raises(p.ValidationError):
        schemas.RoleUpdateModel(username="alice", password="x", role_id=-1)


@pytest.mark.models
def test_registration_default_role():
    from payback.common.config import Config
    model = schemas.RegistrationModel(username="alice", password="Secret123!")
    assert model.role_id == Config.DEFAULT_ROLE_ID


@pytest.mark.models
def test_response_envelope():
    response = schemas.ResponseModel[schemas.PublicUserDTO](
        data=schemas.PublicUserDTO(username="alice", email="a@example.com", role_id=1),
        message="ok",
    )
    assert response.model_dump(by_alias=True) == {
        "data": {"username": "alice", "email": "a@example.com", "roleId": 1},
        "message": "ok",
    }


@pytest.mark.models
@pytest.mark.parametrize(
    "model, data",
    [
        (schemas.RegistrationModel, {"username": "bob", "password": "Secret123!\ud800"}),
        (schemas.CredentialsModel, {"username": "bob\udfff", "password": "Secret123!"}),
        (schemas.PasswordUpdateModel, {"username": "bob", "password": "Secret123!", "newPassword": "N3w\ud800Secret!"}),
    ],
)
def test_lone_surrogates_rejected(model, data):
    with pytest.raises(p.ValidationError):
        model.model_validate(data)
