from cli import main


def test_create_admin_command(client, capsys):
    code = main(["create-admin", "--name", "Root", "--email", "root@campus.example.com", "--password", "secret123"])
    assert code == 0
    assert "'role': 'ADMIN'" in capsys.readouterr().out

    r = client.post("/auth/login", json={"email": "root@campus.example.com", "password": "secret123"})
    assert r.json()["data"]["user"]["role"] == "ADMIN"

    code = main(["create-admin", "--name", "Root", "--email", "root@campus.example.com", "--password", "secret123"])
    assert code == 1
    assert "Email already registered" in capsys.readouterr().err


def test_create_admin_validates_input(capsys):
    code = main(["create-admin", "--name", "R", "--email", "bad", "--password", "x"])
    assert code == 1
    assert capsys.readouterr().err
