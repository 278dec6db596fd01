from dpll_sat import And, Not, Or, Var, solve, switching_cnf
from dpll_sat.normalize import fmt_prop

# Example formula: ((P1 ^ P2) v (Q1 ^ Q2)) ^ ~P1
formula = And(Or(And(Var("P1"), Var("P2")), And(Var("Q1"), Var("Q2"))), Not(Var("P1")))

# Convert to CNF with a switching variable for the disjunction
clauses, pool = switching_cnf(formula)
print(f"Formula: {fmt_prop(formula)}")
print(f"Clauses: {clauses}")

result = solve(clauses)  # assignment is None when UNSAT
print(f"Result: {'SAT' if result.satisfiable else 'UNSAT'}")
if result.satisfiable:
    print(f"Model: {pool.decode(result.assignment)}")
