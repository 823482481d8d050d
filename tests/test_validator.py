# Tests for the completeness check
"""
Test suite for metacap.validator.
"""

import pytest

from metacap.exceptions import Rejected
from metacap.identity import Special, Standard
from metacap.record import Record
from metacap.validator import REQUIRED_FIELDS, finish, fix_up, missing_fields

STARS = Standard('STARS', '804')
FC2 = Special('3234')


def _complete(**overrides) -> Record:
    record = Record(
        id='STARS-804',
        title='Title',
        plot='Plot',
        runtime=120,
        genres={'Drama'},
        director='Director',
        premiered='2020-01-01',
        studio='Studio',
        actors={'Actor'},
        poster=b'poster',
        fanart=b'fanart',
    )
    for key, value in overrides.items():
        setattr(record, key, value)
    return record


class TestFixUp:
    def test_plot_from_title(self):
        record = _complete(plot='')
        fix_up(record, STARS)
        assert record.plot == 'Title'

    def test_plot_kept_when_present(self):
        record = _complete()
        fix_up(record, STARS)
        assert record.plot == 'Plot'

    def test_special_actors_from_director(self):
        record = _complete(actors=set(), director='Seller')
        fix_up(record, FC2)
        assert record.actors == {'Seller'}

    def test_special_empty_director_leaves_actors_empty(self):
        record = _complete(actors=set(), director='')
        fix_up(record, FC2)
        assert record.actors == set()

    def test_standard_actors_untouched(self):
        record = _complete(actors=set())
        fix_up(record, STARS)
        assert record.actors == set()


class TestFinish:
    def test_complete_standard(self):
        record = _complete()
        assert finish(record, STARS) is record

    def test_standard_missing_poster(self):
        with pytest.raises(Rejected) as exc_info:
            finish(_complete(poster=b''), STARS)
        assert exc_info.value.missing == ['poster']
        assert exc_info.value.identity == STARS

    def test_special_does_not_need_poster_or_genres(self):
        record = _complete(poster=b'', genres=set())
        assert finish(record, FC2) is record

    def test_special_actor_fix_up_completes_record(self):
        assert finish(_complete(actors=set(), poster=b''), FC2).actors == {'Director'}

    def test_lists_every_missing_field(self):
        with pytest.raises(Rejected) as exc_info:
            finish(Record(), STARS)
        assert exc_info.value.missing == list(REQUIRED_FIELDS[Standard])

    def test_zero_runtime_is_missing(self):
        assert missing_fields(_complete(runtime=0), STARS) == ['runtime']

    def test_message_names_identity_and_fields(self):
        with pytest.raises(Rejected, match=r'STARS-804 incomplete, missing: poster, fanart'):
            finish(_complete(poster=b'', fanart=b''), STARS)

    def test_plot_fix_up_before_check(self):
        assert finish(_complete(plot=''), STARS).plot == 'Title'
