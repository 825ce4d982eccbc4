from bootstrapper.config.initialization import InitConfig, PasswordPolicy
from bootstrapper.utils.validation import password_problems


def test_default_template_password_passes_default_policy():
    assert password_problems('Ac123456', PasswordPolicy()) == []


def test_every_violation_reported():
    problems = password_problems('abc', PasswordPolicy(min_length=8, require_special=True))
    assert problems == [
        'shorter than 8 characters',
        'missing an uppercase letter',
        'missing a digit',
        'missing a special character',
    ]


def test_relaxed_policy():
    policy = PasswordPolicy(min_length=1, require_uppercase=False, require_lowercase=False, require_digits=False)
    assert password_problems('x', policy) == []
    assert password_problems(None, policy) == ['shorter than 1 characters']


def test_init_config_from_flask_style_mapping():
    cfg = InitConfig.from_mapping({
        'INIT_MODE': 'company',
        'INIT_ALLOW_REINITIALIZATION': 'yes',
        'INIT_PERSIST_STATE': 'false',
        'INIT_PASSWORD_MIN_LENGTH': '10',
        'INIT_PASSWORD_REQUIRE_SPECIAL': True,
    })
    assert cfg.mode == 'company'
    assert cfg.allow_reinitialization is True
    assert cfg.persist_state is False
    assert cfg.password_policy.min_length == 10
    assert cfg.password_policy.require_special is True
    assert cfg.password_policy.require_uppercase is True


def test_init_config_defaults():
    cfg = InitConfig.from_mapping({})
    assert cfg == InitConfig()
    assert cfg.mode == 'website'
    assert cfg.init_token == ''
