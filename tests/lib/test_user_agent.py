import pytest

from canonical_ua.lib.lru_cache import LRUCache
from canonical_ua.lib.user_agent import UserAgent, UserAgentClassifier
from canonical_ua.models.agent_record import AgentRecord

_CHROME = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.6099.109 Safari/537.36'
_FIREFOX = 'Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0'
_IE6 = 'Mozilla/4.0 (compatible; MSIE 6.0; Windows NT 5.1)'
_EDGE = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.36 Edge/16.16299'


@pytest.mark.parametrize(
    ('input', 'family', 'version'),
    [
        (_CHROME, 'chrome', '120.0.0'),
        (_FIREFOX, 'firefox', '121.0.0'),
        (_IE6, 'ie', '6.0.0'),
        (_EDGE, 'ie', '16.16299.0'),
        ('chrome/50.1.2', 'chrome', '50.1.0'),
        ('???', 'other', '0.0.0'),
        ('', 'other', '0.0.0'),
    ],
)
def test_classify(input, family, version):
    ua = UserAgent.classify(input)
    assert ua.get_family() == family
    assert ua.get_version() == version


@pytest.mark.parametrize('input', [_CHROME, _FIREFOX, _IE6, _EDGE, 'Chrome/50.1.2', 'Opera Mini/7.5', '???', ''])
def test_normalize_idempotent(input):
    normalized = UserAgent.normalize(input)
    assert UserAgent.normalize(normalized) == normalized
    assert normalized.endswith('.0')


def test_normalize():
    assert UserAgent.normalize('Chrome/50.1.2') == 'chrome/50.1.0'
    assert UserAgent.normalize(_FIREFOX) == 'firefox/121.0.0'


@pytest.mark.parametrize('input', [_CHROME, _IE6, _EDGE, 'Opera Mini/7.5', 'Chrome/50.1.2'])
def test_normalize_matches_classification(input):
    ua = UserAgent.classify(input)
    assert UserAgent.normalize(input) == f'{ua.get_family()}/{ua.get_version()}'


def test_normalize_resolves_aliases():
    assert UserAgent.normalize('Opera Mini/7.5') == 'op_mini/7.5.0'


def test_unknown():
    ua = UserAgent.classify('???')
    assert ua.is_unknown()
    assert not ua.satisfies('*')
    assert not ua.meets_baseline()
    assert ua.get_baseline() is None


@pytest.mark.parametrize(
    ('input', 'meets_baseline'),
    [
        ('ie/6', False),
        ('ie/7', True),
        ('IE/7.0.1', True),
    ],
)
def test_baseline_gate(input, meets_baseline):
    ua = UserAgent.classify(input)
    assert ua.meets_baseline() == meets_baseline
    assert ua.is_unknown() != meets_baseline
    assert ua.get_baseline() == '>=7'


def test_satisfies():
    ua = UserAgent.classify(_CHROME)
    assert ua.satisfies('>=72')
    assert not ua.satisfies('<72')
    assert not UserAgent.classify('ie/6').satisfies('*')


def test_get_baselines():
    baselines = UserAgent.get_baselines()
    assert baselines['ie'] == '>=7'
    with pytest.raises(TypeError):
        baselines['ie'] = '*'  # type: ignore[index]


def test_classifier_aliases(classifier):
    assert classifier.classify('Mozilla/5.0 Edge/16.16299').record == AgentRecord('ie', 16, 16299, 0)
    assert classifier.classify('Mozilla/5.0 CriOS').get_family() == 'ios_chr'
    assert str(classifier.classify('Mozilla/5.0 OPR/30').record) == 'chrome/43.0.0'


def test_classifier_baseline(classifier):
    assert not classifier.classify('Mozilla/5.0 MSIE 6.0').meets_baseline()
    assert classifier.classify('Mozilla/5.0 MSIE 7.0').meets_baseline()


def test_classifier_cache(classifier, stub_parser):
    first = classifier.classify('Mozilla/5.0 Edge/16.16299')
    second = classifier.classify('Mozilla/5.0 Edge/16.16299')
    assert first.record == second.record
    assert stub_parser.calls == ['Mozilla/5.0 Edge/16.16299']


def test_classifier_cache_key_is_sanitized(classifier, stub_parser):
    first = classifier.classify('Mozilla/5.0 Chrome/71.0.3578.98 Safari/537.36')
    second = classifier.classify('Mozilla/5.0 Chrome/71.0.3578.98 Electron/4.0.0 Safari/537.36')
    assert first.record == second.record == AgentRecord('chrome', 71, 0, 0)
    assert stub_parser.calls == ['Mozilla/5.0 Chrome/71.0.3578.98 Safari/537.36']


def test_classifier_normalized_bypasses_parser(classifier, stub_parser):
    assert classifier.classify('Firefox/3.6.28').record == AgentRecord('firefox', 3, 6, 0)
    assert not stub_parser.calls


def test_classifier_case_insensitive_shape(classifier, stub_parser):
    assert classifier.classify('CHROME/50.1').record == classifier.classify('chrome/50.1').record
    assert not stub_parser.calls


@pytest.mark.parametrize('input', [_CHROME, _FIREFOX, _IE6, _EDGE, 'Opera Mini/7.5'])
def test_classify_case_insensitive(input):
    expected = UserAgent.classify(input).record
    assert expected.family != 'other'
    assert UserAgent.classify(input.upper()).record == expected
    assert UserAgent.classify(input.lower()).record == expected


def test_classifier_normalize_named(classifier, stub_parser):
    assert classifier.normalize('Opera Coast/3.0') == 'opera coast/3.0.0'
    assert classifier.normalize('opera coast/3.0.0') == 'opera coast/3.0.0'
    assert classifier.normalize('Opera Tablet/12.1') == 'opera/12.1.0'
    assert stub_parser.calls == ['Opera Coast/3.0', 'opera coast/3.0.0', 'Opera Tablet/12.1']


def test_classifier_normalize_prefers_classification(classifier, stub_parser):
    assert classifier.normalize('Mozilla/5.0 Edge/16.16299') == 'ie/16.16299.0'
    assert classifier.normalize('VeryLongFamilyName/100.100.100') == 'verylongfamilyname/100.100.0'
    assert stub_parser.calls == ['Mozilla/5.0 Edge/16.16299']


def test_classifier_patch_zeroed(classifier, stub_parser):
    for user_agent in (*stub_parser.records, 'chrome/1.2.3', 'unknown'):
        assert classifier.classify(user_agent).get_version().endswith('.0')


def test_classifier_parser_failure():
    def parser(user_agent: str) -> AgentRecord:
        raise RuntimeError('parser failure')

    ua = UserAgentClassifier(parser=parser, cache=LRUCache(4)).classify('Mozilla/5.0 Broken')
    assert ua.get_family() == 'other'
    assert ua.is_unknown()
    assert not ua.satisfies('*')
