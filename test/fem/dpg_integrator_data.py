import numpy as np

s2 = np.sqrt(2)

# element matrices on the reference triangle (0, 0), (1, 0), (0, 1)
triangle_data = [
    {
        "name": "gradgrad",
        "spaces": [("L", 1, 'C'), ("L", 1, 'C')],
        "coef": 1.0,
        "matrix": np.array([[[1.0, -0.5, -0.5],
                             [-0.5, 0.5, 0.0],
                             [-0.5, 0.0, 0.5]]], dtype=np.float64),
    },
    {
        "name": "eyeeye",
        "spaces": [("L", 1, 'C'), ("L", 1, 'D')],
        "coef": 2.0,
        "matrix": np.array([[[2, 1, 1],
                             [1, 2, 1],
                             [1, 1, 2]]], dtype=np.float64)/12,
    },
    {
        # rows: test functions lambda_i, cols: RT0 dof of face j
        "name": "flxtrc",
        "spaces": [("RT", 0, None), ("L", 1, 'D')],
        "coef": 1.0,
        "matrix": np.array([[[0.0, 0.5, 0.5],
                             [s2/2, 0.0, 0.5],
                             [s2/2, 0.5, 0.0]]], dtype=np.float64),
    },
    {
        "name": "trctrc",
        "spaces": [("L", 1, 'C'), ("L", 1, 'C')],
        "coef": 1.0,
        "matrix": np.array([[[2/3, 1/6, 1/6],
                             [1/6, (s2+1)/3, s2/6],
                             [1/6, s2/6, (s2+1)/3]]], dtype=np.float64),
    },
    {
        "name": "robinvol",
        "spaces": [("L", 1, 'C'), ("L", 1, 'C')],
        "coef": 3.0,
        "matrix": 3*np.array([[[2/3, 1/6, 1/6],
                               [1/6, (s2+1)/3, s2/6],
                               [1/6, s2/6, (s2+1)/3]]], dtype=np.float64),
    },
    {
        # phi_0 = s2*(x, y), phi_1 = (x - 1, y), phi_2 = (x, y - 1)
        "name": "eyeeye",
        "spaces": [("RT", 0, None), ("RT", 0, None)],
        "coef": 1.0,
        "matrix": np.array([[[1/3, 0.0, 0.0],
                             [0.0, 1/3, -1/6],
                             [0.0, -1/6, 1/3]]], dtype=np.float64),
    },
]

# element matrices on the reference tetrahedron
tetrahedron_data = [
    {
        "name": "gradgrad",
        "spaces": [("L", 1, 'C'), ("L", 1, 'C')],
        "coef": 1.0,
        "matrix": np.array([[[3, -1, -1, -1],
                             [-1, 1, 0, 0],
                             [-1, 0, 1, 0],
                             [-1, 0, 0, 1]]], dtype=np.float64)/6,
    },
    {
        "name": "eyeeye",
        "spaces": [("L", 1, 'C'), ("L", 1, 'C')],
        "coef": 1.0,
        "matrix": (np.ones((1, 4, 4)) + np.eye(4)[None, ...])/120,
    },
]

# element vectors of neumannvol on the reference triangle, P1 component
neumann_data = [
    {
        "coefs": [1, 1.0, 0.0, 0.0],
        "vector": np.array([[1.0, (s2+1)/2, (s2+1)/2]], dtype=np.float64),
    },
    {
        "coefs": [1, 0.0, 1.0, 0.0],
        "vector": np.array([[-0.5, 0.5, 0.0]], dtype=np.float64),
    },
    {
        "coefs": [1, 1.0, 1.0, 0.0],
        "vector": np.array([[0.5, (s2+2)/2, (s2+1)/2]], dtype=np.float64),
    },
]
