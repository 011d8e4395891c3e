# circuitsim/tests/test_correctness_small.py
import numpy as np
from circuitsim.circuit import Circuit

def almost(p, q, tol=1e-6):
    return np.allclose(p, q, atol=tol, rtol=0)

def probs(psi):
    return np.abs(psi)**2

def test_h_on_zero():
    res = Circuit.empty(1).h(0).run()
    assert almost(probs(res.state_vector), [0.5, 0.5])

def test_x_flips():
    # |0> -> X -> |1>
    res = Circuit.empty(1).x(0).run()
    assert almost(res.probabilities, [0.0, 1.0])

def test_qubit_zero_is_most_significant_bit():
    # X on qubit 0 of 3 -> |100> = index 4
    res = Circuit.empty(3).x(0).run()
    expect = np.zeros(8); expect[4] = 1.0
    assert almost(res.probabilities, expect)

def test_cnot_control_off_noop():
    # |00> --(CNOT c=1,t=0)--> stays |00>
    res = Circuit.empty(2).cnot(1,0).run()
    expect = np.zeros(4); expect[0]=1.0
    assert almost(res.probabilities, expect)

def test_cnot_control_on_flips():
    # X on qubit 1 gives |01>, then CNOT(1->0): |01> -> |11>
    res = Circuit.empty(2).x(1).cnot(1,0).run()
    expect = np.zeros(4); expect[3]=1.0
    assert almost(res.probabilities, expect)

def test_bell_state_amplitudes():
    res = Circuit.empty(2).h(0).cnot(0,1).run()
    s = 1/np.sqrt(2)
    assert almost(res.state_vector, [s, 0, 0, s])

def test_y_s_t_phases():
    s = 1/np.sqrt(2)
    assert almost(Circuit.empty(1).y(0).run().state_vector, [0, 1j])
    assert almost(Circuit.empty(1).h(0).s(0).run().state_vector, [s, 1j*s])
    assert almost(Circuit.empty(1).h(0).t(0).run().state_vector,
                  [s, s*np.exp(0.25j*np.pi)])
    assert almost(Circuit.empty(1).h(0).z(0).run().state_vector, [s, -s])

def test_rotations_match_closed_form():
    theta = 0.7
    c, sn = np.cos(theta/2), np.sin(theta/2)
    assert almost(Circuit.empty(1).rx(0, theta).run().state_vector, [c, -1j*sn])
    assert almost(Circuit.empty(1).ry(0, theta).run().state_vector, [c, sn])
    assert almost(Circuit.empty(1).rz(0, theta).run().state_vector, [np.exp(-0.5j*theta), 0])

def test_rx_pi_acts_like_x_up_to_phase():
    res = Circuit.empty(1).rx(0, np.pi).run()
    assert almost(res.probabilities, [0.0, 1.0])

def test_normalization():
    st = Circuit.empty(2).h(0).h(1).cnot(1,0).engine().state
    n2 = float((st.as_numpy().conj()*st.as_numpy()).sum().real)
    assert abs(1.0 - n2) < 1e-6
