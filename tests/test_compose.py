# tests/test_compose.py
"""Unit tests for option composition and constraint checking."""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lgbm_params.params import applications as app
from lgbm_params.params import boosters as bst
from lgbm_params.params import devices as dev
from lgbm_params.params import general as gen
from lgbm_params.params import parallelism as par
from lgbm_params.params.compose import Entry, OptionSet, compose, find_violations, flatten
from lgbm_params.params.metrics import NDCG, MetricType
from lgbm_params.params.refined import PositiveInt
from lgbm_params.utils.exceptions import (
    CompositionError,
    ConfigurationError,
    ConflictingOptions,
    DuplicateOption,
    IncompatibleOption,
    MissingDependentOption,
)


def _codes(options, **kwargs):
    with pytest.raises(CompositionError) as exc_info:
        compose(options, **kwargs)
    return exc_info.value.codes


class TestFlattening:
    """Nested sub-options become top-level entries after their parent."""

    @pytest.mark.unit
    def test_dart_booster_flattens(self):
        """DART with a drop rate yields boosting=dart then drop_rate."""
        option_set = compose(booster=bst.DART([bst.DropRate(0.2)]))
        assert option_set.keys() == ["boosting", "drop_rate"]
        assert option_set.get("boosting") == "dart"
        assert option_set.get("drop_rate") == 0.2

    @pytest.mark.unit
    def test_multiclass_emits_num_class(self):
        """Multi-class adds num_class after the objective."""
        option_set = compose(application=app.MultiClass(app.MultiClassStyle.SIMPLE, 3))
        assert list(option_set) == [
            Entry("objective", "multiclass"),
            Entry("num_class", PositiveInt(3)),
        ]

    @pytest.mark.unit
    def test_application_and_booster_come_first(self):
        """Application, then booster, then general options in given order."""
        option_set = compose(
            [gen.NumLeaves(63), gen.LearningRate(0.1)],
            application=app.BinaryClassification([app.IsUnbalance(True)]),
            booster=bst.GOSS([bst.TopRate(0.2), bst.OtherRate(0.1)]),
        )
        assert option_set.keys() == [
            "objective", "is_unbalance", "boosting", "top_rate", "other_rate",
            "num_leaves", "learning_rate",
        ]

    @pytest.mark.unit
    def test_socket_parallelism_flattens(self):
        """Socket learners emit machine count, list, port and time-out."""
        learner = par.DataParallel(par.SocketParallelism(4, "mlist.txt", 12500, 60))
        entries = flatten(gen.Parallelism(learner))
        assert [e.key for e in entries] == [
            "tree_learner", "num_machines", "machine_list_filename", "local_listen_port", "time_out",
        ]
        assert entries[0].value == "data"

    @pytest.mark.unit
    def test_mpi_parallelism_flattens(self):
        """MPI learners only emit the machine count."""
        entries = flatten(gen.Parallelism(par.FeatureParallel(par.MPIParallelism(8))))
        assert [e.key for e in entries] == ["tree_learner", "num_machines"]

    @pytest.mark.unit
    def test_gpu_device_flattens(self):
        """GPU options follow device_type."""
        entries = flatten(gen.Device(dev.GPU([dev.GpuDeviceId(1)])))
        assert [(e.key, e.value) for e in entries] == [("device_type", "gpu"), ("gpu_device_id", 1)]

    @pytest.mark.unit
    def test_ndcg_positions_flatten(self):
        """NDCG positions get their own key after the metric list."""
        entries = flatten(gen.Metric([NDCG([1, 3]), MetricType.MAP]))
        assert [e.key for e in entries] == ["metric", "ndcg_eval_at"]

    @pytest.mark.unit
    def test_plain_option_flattens_to_one_entry(self):
        """A general option is a single entry."""
        assert flatten(gen.MaxBin(255)) == [Entry("max_bin", gen.MaxBin(255).value)]


class TestOptionSet:
    """OptionSet access helpers."""

    @pytest.mark.unit
    def test_container_protocol(self):
        """Length, membership, iteration and lookup."""
        option_set = compose([gen.NumThreads(4), gen.Verbosity(gen.VerbosityLevel.WARN)])
        assert len(option_set) == 2
        assert "num_threads" in option_set
        assert "seed" not in option_set
        assert option_set.get("seed", 42) == 42
        assert [entry.key for entry in option_set] == ["num_threads", "verbosity"]

    @pytest.mark.unit
    def test_empty(self):
        """Composing nothing gives an empty set."""
        assert compose() == OptionSet()
        assert len(compose([])) == 0


class TestConstraints:
    """Cross-option constraints and the violations they report."""

    @pytest.mark.unit
    def test_multiclass_without_classes(self):
        """A class count of zero is a missing dependent option."""
        with pytest.raises(CompositionError) as exc_info:
            compose(application=app.MultiClass(app.MultiClassStyle.SIMPLE, 0))
        violation = exc_info.value.violations[0]
        assert isinstance(violation, MissingDependentOption)
        assert violation.code == "MULTICLASS_NUM_CLASS"

    @pytest.mark.unit
    def test_duplicate_general_option(self):
        """The same key twice is rejected."""
        with pytest.raises(CompositionError) as exc_info:
            compose([gen.NumLeaves(31), gen.NumLeaves(63)])
        violation = exc_info.value.violations[0]
        assert isinstance(violation, DuplicateOption)
        assert violation.keys == ("num_leaves",)

    @pytest.mark.unit
    def test_duplicate_inside_booster(self):
        """Duplicates among flattened sub-options are rejected too."""
        assert _codes([], booster=bst.DART([bst.DropRate(0.1), bst.DropRate(0.2)])) == ["DUPLICATE_KEY"]

    @pytest.mark.unit
    def test_objective_given_twice(self):
        """An application passed both ways is a duplicate."""
        codes = _codes([gen.Objective(app.LambdaRank())], application=app.LambdaRank())
        assert codes == ["DUPLICATE_KEY"]

    @pytest.mark.unit
    def test_training_and_prediction_data_share_a_key(self):
        """Training and prediction data cannot both be set."""
        assert _codes([gen.TrainingData("a.csv"), gen.PredictionData("b.csv")]) == ["DUPLICATE_KEY"]

    @pytest.mark.unit
    def test_socket_needs_machine_list(self):
        """More than one socket machine needs a machine list file."""
        learner = gen.Parallelism(par.DataParallel(par.SocketParallelism(2)))
        assert _codes([learner]) == ["SOCKET_MACHINE_LIST"]

        single = gen.Parallelism(par.DataParallel(par.SocketParallelism(1)))
        assert "tree_learner" in compose([single])

    @pytest.mark.unit
    def test_random_forest_needs_bagging(self):
        """Random forest needs row or column sub-sampling."""
        assert _codes([], booster=bst.RandomForest()) == ["RANDOM_FOREST_BAGGING"]
        assert _codes(
            [gen.BaggingFreq(1), gen.BaggingFraction(1.0)], booster=bst.RandomForest()
        ) == ["RANDOM_FOREST_BAGGING"]

        compose([gen.BaggingFreq(1), gen.BaggingFraction(0.8)], booster=bst.RandomForest())
        compose([gen.FeatureFraction(0.7)], booster=bst.RandomForest())

    @pytest.mark.unit
    def test_top_k_requires_voting(self):
        """top_k is only accepted with the voting learner."""
        violations = find_violations([gen.TopK(20)])
        assert isinstance(violations[0], IncompatibleOption)
        assert violations[0].code == "TOP_K_REQUIRES_VOTING"

        voting = gen.Parallelism(par.VotingParallel(par.MPIParallelism(2)))
        assert find_violations([voting, gen.TopK(20)]) == []

    @pytest.mark.unit
    def test_alpha_requires_huber_or_quantile(self):
        """alpha is rejected under the default L2 objective."""
        assert _codes([gen.Alpha(0.9)]) == ["ALPHA_REQUIRES_HUBER_OR_QUANTILE"]
        compose([gen.Alpha(0.9)], application=app.Regression(app.Quantile()))
        compose([gen.Alpha(0.9)], application=app.Regression(app.Huber()))

    @pytest.mark.unit
    def test_sigmoid_scope(self):
        """sigmoid is for binary, lambdarank and one-vs-all only."""
        assert _codes(
            [gen.Sigmoid(1.0)], application=app.MultiClass(app.MultiClassStyle.SIMPLE, 3)
        ) == ["SIGMOID_REQUIRES_BINARY_RANKING_OR_OVA"]
        compose([gen.Sigmoid(1.0)], application=app.MultiClass(app.MultiClassStyle.ONE_VS_ALL, 3))
        compose([gen.Sigmoid(1.0)], application=app.LambdaRank())

    @pytest.mark.unit
    def test_reg_sqrt_requires_regression(self):
        """reg_sqrt is rejected for classification."""
        assert _codes(
            [gen.RegSqrt(True)], application=app.BinaryClassification()
        ) == ["REG_SQRT_REQUIRES_REGRESSION"]
        compose([gen.RegSqrt(True)], application=app.Regression(app.Poisson()))

    @pytest.mark.unit
    def test_boost_from_average_scope(self):
        """boost_from_average is rejected for ranking."""
        assert _codes(
            [gen.BoostFromAverage(True)], application=app.LambdaRank()
        ) == ["BOOST_FROM_AVERAGE_OBJECTIVE"]
        compose([gen.BoostFromAverage(False)], application=app.CrossEntropy())

    @pytest.mark.unit
    def test_unbalance_conflicts_with_scale_pos_weight(self):
        """is_unbalance and scale_pos_weight cannot be combined."""
        binary = app.BinaryClassification([app.IsUnbalance(True), app.ScalePosWeight(3.0)])
        with pytest.raises(CompositionError) as exc_info:
            compose(application=binary)
        assert isinstance(exc_info.value.violations[0], ConflictingOptions)

        compose(application=app.BinaryClassification([app.IsUnbalance(False), app.ScalePosWeight(3.0)]))

    @pytest.mark.unit
    def test_goss_rates(self):
        """top_rate + other_rate may not exceed one."""
        assert _codes([], booster=bst.GOSS([bst.TopRate(0.7), bst.OtherRate(0.4)])) == ["GOSS_RATES_EXCEED_ONE"]
        compose(booster=bst.GOSS([bst.TopRate(0.5), bst.OtherRate(0.5)]))

    @pytest.mark.unit
    def test_exclusive_prediction_outputs(self):
        """Only one special prediction output may be enabled."""
        assert _codes(
            [gen.PredictRawScore(True), gen.PredictContrib(True)]
        ) == ["EXCLUSIVE_PREDICTION_OUTPUT"]
        compose([gen.PredictRawScore(True), gen.PredictLeafIndex(False)])

    @pytest.mark.unit
    def test_all_violations_are_reported(self):
        """Every violation is collected into one error."""
        codes = _codes(
            [gen.NumLeaves(31), gen.NumLeaves(63), gen.TopK(5), gen.Alpha(0.5)],
            application=app.MultiClass(app.MultiClassStyle.SIMPLE, 0),
        )
        assert codes == [
            "DUPLICATE_KEY",
            "MULTICLASS_NUM_CLASS",
            "TOP_K_REQUIRES_VOTING",
            "ALPHA_REQUIRES_HUBER_OR_QUANTILE",
        ]

    @pytest.mark.unit
    def test_sub_option_is_not_a_top_level_option(self):
        """Booster options must go inside their booster."""
        with pytest.raises(ConfigurationError) as exc_info:
            compose([bst.DropRate(0.1)])
        assert not isinstance(exc_info.value, CompositionError)
        assert exc_info.value.error_code == "OPTION_TYPE_MISMATCH"

    @pytest.mark.unit
    def test_rejection_is_logged(self, caplog):
        """A rejected configuration is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="lgbm_params"):
            with pytest.raises(CompositionError):
                compose([gen.TopK(5)])
        assert any("violation" in record.getMessage() for record in caplog.records)


class TestProperties:
    """Properties of composition over generated option selections."""

    def test_disjoint_keys_never_duplicate(self):
        """Options with pairwise distinct keys never report duplicates."""
        candidates = [
            gen.NumLeaves(31), gen.LearningRate(0.1), gen.MaxDepth(6), gen.NumThreads(2),
            gen.MinDataInLeaf(20), gen.RegularizationL1(0.5), gen.RegularizationL2(1.0),
            gen.MaxBin(63), gen.Verbosity(gen.VerbosityLevel.INFO), gen.RandomSeed(7),
            gen.Iterations(100), gen.EarlyStoppingRounds(10), gen.Metric([MetricType.AUC]),
        ]

        @given(selection=st.lists(st.sampled_from(candidates), unique=True))
        @settings(max_examples=50)
        def check(selection) -> None:
            violations = find_violations(selection)
            assert not any(isinstance(v, DuplicateOption) for v in violations)
            assert compose(selection).keys() == [flatten(o)[0].key for o in selection]

        check()

    def test_any_repeated_option_is_a_duplicate(self):
        """Repeating any option reports exactly that key."""
        candidates = [gen.NumLeaves(31), gen.MaxDepth(6), gen.Iterations(10), gen.SaveBinary(True)]

        @given(option=st.sampled_from(candidates), extra=st.sampled_from(candidates))
        @settings(max_examples=30)
        def check(option, extra) -> None:
            violations = find_violations([option, extra, option])
            duplicates = [v for v in violations if isinstance(v, DuplicateOption)]
            assert [v.keys for v in duplicates] == [(flatten(option)[0].key,)]

        check()
