"""
Environment generator tests
"""
from dotenv import dotenv_values

from generate_env import EnvGenerator


def test_generated_env_file(tmp_path):
    env_file = tmp_path / '.env'
    generator = EnvGenerator(env_file=env_file)
    assert generator.generate(force=True) is True

    values = dotenv_values(env_file)
    assert len(values['SECRET_KEY']) == 128
    assert values['API_KEY']
    assert values['DATABASE_URL'] == 'sqlite:///instance/backoffice.db'
    assert values['RATELIMIT_ENABLED'] == 'True'
    assert values['FLASK_DEBUG'] == 'False'
    assert (env_file.stat().st_mode & 0o777) == 0o600


def test_dev_mode_values(tmp_path):
    env_file = tmp_path / '.env'
    EnvGenerator(dev_mode=True, env_file=env_file).generate(force=True)
    values = dotenv_values(env_file)
    assert values['SECRET_KEY'] == 'dev-secret-key-DO-NOT-USE-IN-PRODUCTION'
    assert values['API_KEY'] == 'dev-api-key'
    assert values['RATELIMIT_ENABLED'] == 'False'


def test_backup_of_existing_file(tmp_path):
    env_file = tmp_path / '.env'
    env_file.write_text('SECRET_KEY=old\n')
    backup = EnvGenerator(env_file=env_file).create_backup()
    assert backup.read_text() == 'SECRET_KEY=old\n'
